"""Front ends that drive the task board."""
