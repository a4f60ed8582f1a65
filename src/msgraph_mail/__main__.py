"""Entry point: delegates to the CLI app."""

from rich.traceback import install

from msgraph_mail.cli import app
from msgraph_mail.utils.logger import configure_logging


def main() -> None:
    install(show_locals=False, max_frames=5, word_wrap=True)
    configure_logging()
    app()


if __name__ == "__main__":
    main()
