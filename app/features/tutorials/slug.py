import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    # Distinct titles may share a slug; collisions are the caller's problem.
    return _NON_ALNUM.sub("-", title.lower()).strip("-")
