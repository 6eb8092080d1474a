"""School Access Core.

Multi-school education management API built around an authorization and
tenant-isolation engine that scopes every read to the schools a caller
belongs to.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
