"""State/store layer.

This package is the single owner of the station store: the pure merge
routine, the JSON file persistence, and the lock-guarded store object that
request handlers share.
"""
