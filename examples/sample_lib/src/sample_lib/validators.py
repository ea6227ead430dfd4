def is_valid_email(address):
    name, _, domain = address.partition("@")
    return bool(name) and "." in domain


def check_range(value, low, high):
    return low <= value <= high


def _is_positive(x):
    return x > 0
