# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP-facing glue around the batch prober."""

from .handler import ApiResponse, cors_headers, handle_request

__all__ = ["ApiResponse", "cors_headers", "handle_request"]
