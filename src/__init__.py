"""Package shim so tests can import ``src.wallos_supervisor`` from a checkout.

``pkgutil.extend_path`` lets this ``src`` package span several directories on
``sys.path``.
"""

from __future__ import annotations

from pkgutil import extend_path

__path__ = extend_path(__path__, __name__)  # type: ignore[name-defined]
