"""Collection key singularization"""


def singularize(key: str) -> str:
    """Strip one trailing 's' ("articles" -> "article"). Irregular plurals are not handled."""
    return key[:-1] if key.endswith("s") else key
