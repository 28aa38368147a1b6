"""Composite key construction for keyring and custom backends.

A credential triple (host, user, cred_type) is flattened into one string so
that stores exposing only ``get(key)`` / ``set(key, value)`` can hold it::

    {MOCK_HOST}:{MOCK_USER}:{SF_NODE_JS_DRIVER}:{MOCK_CRED}

Every component is upper-cased and wrapped in braces. Literal braces inside
a component are doubled so that no host or user value can close its own
segment early and forge the key of a different triple. Legacy keys are
built without escaping, matching what older drivers stored.
"""

DRIVER_ID = "SF_NODE_JS_DRIVER"


def _segment(component: str, escape: bool = True) -> str:
    text = str(component).upper()
    if escape:
        text = text.replace("{", "{{").replace("}", "}}")
    return "{" + text + "}"


def build_key(
    host: str,
    user: str,
    cred_type: str,
    driver_id: str = DRIVER_ID,
    legacy_format: bool = False,
) -> str:
    """Build the composite key for a credential triple.

    Args:
        host: Account host the token was issued for
        user: User name the token belongs to
        cred_type: Credential type (e.g. 'ID_TOKEN')
        driver_id: Product identifier embedded as the third component
        legacy_format: Reproduce the key written by older drivers, which
            ends with a doubled closing brace and leaves braces inside
            components unescaped

    Returns:
        Composite key string

    Example:
        >>> build_key("mock_host", "mock_user", "mock_cred")
        '{MOCK_HOST}:{MOCK_USER}:{SF_NODE_JS_DRIVER}:{MOCK_CRED}'
    """
    key = ":".join(_segment(part, escape=not legacy_format) for part in (host, user, driver_id, cred_type))
    if legacy_format:
        key += "}"
    return key
