"""Library identity constants — single source of truth for version."""


class AppBranding:
    """Library identity constants."""

    APP_NAME = "UpdateManager"
    VERSION = "1.0.0"

    @classmethod
    def window_title(cls) -> str:
        return f"{cls.APP_NAME}  v{cls.VERSION}"
