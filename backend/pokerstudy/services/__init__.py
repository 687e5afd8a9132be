# Services package init
"""
Poker Study Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP; services handle the rules of each entity.
How:   Services accept a session plus request schemas, validate through
       `pokerstudy.validation`, and return response schemas. Each module
       exposes a stateless singleton that route handlers import directly.

Service Inventory:
    - PlayerService: opponent profiles, note appends, bulk import
    - HandReviewService: hands posted for review, comments, ratings, archive
    - ReviewerService: idempotent reviewer name registry
    - ClaimedUserService: claimed names, bcrypt passwords, improvement notes
    - LeakService: leaks and the spaced-repetition review of resolved ones
    - EdgeService: edges (exploitable advantages)
    - MentalGameService: per-user mental game journal
    - BackupService: export and destructive restore of players and hands
"""
