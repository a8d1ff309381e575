"""
Shared service utilities.

- http.py  - ``requests`` session with timeout and (no-)retry policy
"""
