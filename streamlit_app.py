"""Streamlit Cloud entry point.

Deployments that launch ``streamlit_app.py`` as the main module land here; the
application itself lives in :mod:`chat_app`, so we simply forward ``main``.
"""

from chat_app import main as chat_app_main


def main() -> None:
    """Invoke the research companion application."""

    chat_app_main()


if __name__ == "__main__":  # pragma: no cover
    main()
