#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging

_log = logging.getLogger(__name__)


class FillError(Exception):
    pass


class Unsolvable(FillError):
    """Raised when the search exhausts every candidate without completing the grid."""
    pass
