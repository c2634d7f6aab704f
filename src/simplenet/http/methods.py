# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP verbs understood by endpoint descriptors."""

from enum import Enum


class HttpMethod(str, Enum):
    """CRUD verbs; the value is the wire representation."""

    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    def __str__(self) -> str:
        return self.value


__all__ = ["HttpMethod"]
