"""ai-gateway-launcher - runs the prebuilt AI Gateway binary for this platform."""

__version__ = "0.1.0"
