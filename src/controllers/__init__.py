"""
Controllers for Portal Browser.
State transitions over AppState: rows and selection, sorting, the edit
session and the mutation coordinator.
"""
