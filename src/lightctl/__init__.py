"""Read and adjust backlight/LED brightness through sysfs."""

__version__ = "1.0.0"
