"""GUI-agnostic core of the Outline Toolkit: models, services and errors."""
