from littlesteps.core.config import get_settings


def media_url_for_key(key: str | None) -> str | None:
    if not key:
        return None

    settings = get_settings()
    path = f"{settings.media_url_prefix.rstrip('/')}/{key}"
    if settings.public_base_url:
        return f"{settings.public_base_url.rstrip('/')}{path}"
    return path
