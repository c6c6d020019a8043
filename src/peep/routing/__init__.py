"""Routing: insertion-ordered route table with named placeholders.

Routes are registered during setup and frozen when the app starts
serving. The first registered route that matches wins.
"""
