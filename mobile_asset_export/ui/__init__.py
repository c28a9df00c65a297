# -*- coding: utf-8 -*-
"""
Mobile Asset Export UI package (PySide6).
"""
