"""Application entry point for the storefront backend server."""

from storefront.app import App
from storefront.config import Config
from storefront.logging import setup_logging
from storefront.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
