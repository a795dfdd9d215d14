"""Backend-independent building blocks shared by game logic and renderers."""
