#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Crossword grid filling with a weighted word list."""

__version__ = "0.1.0"
