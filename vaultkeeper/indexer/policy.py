"""Folder inclusion and exclusion rules."""

from vaultkeeper.storage import IndexSettings


def is_in_allowed_folder(settings: IndexSettings, path: str) -> bool:
    """True if no inclusion list is set or the path starts with an included folder."""
    included = settings.included_folders
    if not included:
        return True
    return any(path.startswith(folder) for folder in included)


def is_in_excluded_folder(settings: IndexSettings, path: str) -> bool:
    return any(path.startswith(folder) for folder in settings.excluded_folders)


def is_allowed(settings: IndexSettings, path: str) -> bool:
    return is_in_allowed_folder(settings, path) and not is_in_excluded_folder(settings, path)
