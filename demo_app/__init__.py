"""
Script: demo_app package
What: The application that the pipeline tests, packages, and ships in a container image.
Doing: Exposes the greeting entry point and the arithmetic helper.
Why: Gives the pipeline a small, real program to build and publish.
Goal: Keep the shipped artifact trivial so the pipeline itself is the focus.
"""

from demo_app.app import GREETING, add, main

__all__ = ["GREETING", "add", "main"]
