"""Run-length codec for strings."""

from itertools import groupby


def encode(text):
    """"aaab" -> "3a1b"."""
    return "".join(f"{len(list(group))}{char}" for char, group in groupby(text))


def decode(data):
    out = []
    count = ""
    for ch in data:
        if ch.isdigit():
            count += ch
        else:
            out.append(ch * int(count))
            count = ""
    return "".join(out)
