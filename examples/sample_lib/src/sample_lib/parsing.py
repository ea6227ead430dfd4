"""key=value pairs."""


def parse_pair(text):
    key, value = text.split("=", 1)
    return key.strip(), value.strip()


def format_pair(pair):
    key, value = pair
    return f"{key}={value}"
