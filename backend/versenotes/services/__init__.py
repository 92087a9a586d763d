# Services package init
"""
VerseNotes Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - UserService:       signup (hash + insert) and login (lookup + verify)
    - PostService:       create post, list feed with author emails
    - HighlightService:  save, list per user, delete by id
    - PasswordHasher:    bcrypt hashing off the event loop
    - AccessPolicy:      list/delete permission decisions (permissive default)

Services receive the request's AsyncSession on every call and raise the
exceptions from versenotes.exceptions; they never build HTTP responses.
"""
