"""
FakeStack Backend — Stores
============================

What:  Persistence-facing business logic, one service per entity family.
How:   Each service is a stateless class with a module-level singleton.
       Methods take the request's AsyncSession and return the payload or a
       StoreError (fakestack.results); expected failures are never raised.

Service Inventory:
    - TagService:      find-or-create tags, per-tag question counts
    - QuestionService: save, view, vote, order and search questions
    - UserService:     signup, login, password reset, lookup, delete
    - AnswerService:   attach answers to questions
    - CommentService:  attach comments to questions or answers
"""
