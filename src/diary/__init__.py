"""Diary - a terminal journal with a JSON entry store."""
