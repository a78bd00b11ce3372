"""Small string helpers shared by the data models."""


def get_sort_string(name: str, sort_index: int) -> str:
    """Return the part of a name it should be sorted on.

    Args:
        name: The display name
        sort_index: 1-indexed character to sort from

    Returns:
        The name starting at ``sort_index``, or the full name when the index
        is 1 or less, or past the end of the name
    """
    if sort_index <= 1 or sort_index > len(name):
        return name
    return name[sort_index - 1:]


def bgg_url(path: str | None) -> str | None:
    """Turn a protocol-relative image path from the site into a usable URL."""
    if not path:
        return None
    if path.startswith("//"):
        return f"https:{path}"
    return path
