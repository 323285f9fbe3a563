"""Allow ``python -m ai_gateway_launcher``."""

from ai_gateway_launcher.cli import main

if __name__ == "__main__":
    main()
