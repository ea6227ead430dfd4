"""Everything here touches the outside world."""

import json
import os


def save(data, path):
    with open(path, "w") as fh:
        json.dump(data, fh)


def load_settings(path):
    if not os.path.exists(path):
        return {}
    with open(path) as fh:
        return json.load(fh)


def log_total(values):
    total = sum(values)
    print(total)
    return total
