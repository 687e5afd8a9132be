# Routes package init
"""
Poker Study Backend — API Routes Package
=========================================

What:  HTTP route handlers. Each module owns one resource.

Route Inventory:
    - players.py:          /api/players (CRUD, /import, /{id}/notes)
    - hands_to_review.py:  /api/hands-to-review (CRUD, gated DELETE)
    - reviewers.py:        /api/reviewers
    - me.py:               /api/me (claim, login, claimed, improvement-notes)
    - learning.py:         /api/learning (leaks, /leaks/{id}/review, /due, edges, mental)
    - backup.py:           /api/backup/export, /api/backup/restore
    - templates.py:        /api/templates, /api/notes/one-liner
    - health.py:           /health

Routes stay thin: parse the request, call a service, pick the status code.
Business rules live in `pokerstudy.services` and `pokerstudy.validation`.
"""
