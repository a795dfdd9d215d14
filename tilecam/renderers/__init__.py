"""Drawing backends implementing the Renderer interface."""
