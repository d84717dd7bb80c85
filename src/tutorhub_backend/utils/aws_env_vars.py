import os

DEFAULT_MESSAGING_RETENTION_MONTHS = 12


def _get_resource_by_env_var(env_var: str) -> str:
    value = os.environ.get(env_var)
    if not value:
        raise ValueError(f"Missing environment variable: {env_var}")
    return value


def get_aws_region() -> str:
    return _get_resource_by_env_var("AWS_REGION")


def get_messages_table_name() -> str:
    return _get_resource_by_env_var("MESSAGES_TABLE_NAME")


def get_messaging_retention_months() -> int:
    """
    Number of calendar months messages are kept before the retention job purges them.
    Defaults to 12 when unset; anything other than a positive integer is a configuration error.
    """
    raw_value = os.environ.get("MESSAGING_RETENTION_MONTHS", "").strip()
    if not raw_value:
        return DEFAULT_MESSAGING_RETENTION_MONTHS

    try:
        months = int(raw_value)
    except ValueError:
        raise ValueError(f"Invalid MESSAGING_RETENTION_MONTHS value: {raw_value!r}") from None

    if months < 1:
        raise ValueError(f"MESSAGING_RETENTION_MONTHS must be positive, got {months}")
    return months
