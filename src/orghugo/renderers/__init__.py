#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Export backends.

- ``org``: the default backend, writing the document back out as Org text
- ``hugo``: derived from ``org``; sidenotes, ``ref`` links and dated output
"""

from orghugo.renderers.hugo import HUGO_BACKEND
from orghugo.renderers.org import ORG_BACKEND

BACKENDS = {
    ORG_BACKEND.name: ORG_BACKEND,
    HUGO_BACKEND.name: HUGO_BACKEND,
}

__all__ = ["BACKENDS", "HUGO_BACKEND", "ORG_BACKEND"]
