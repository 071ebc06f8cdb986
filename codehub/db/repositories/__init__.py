"""
Per-domain repository modules for database access.

`repos` handles code repositories (the hosted kind); `users`, `stars` and
`follows` cover the social side.
"""
