# Services package init
"""
StackIt Backend — Services Layer
==================================

What:  Business rules between the routes (HTTP) and the ORM (persistence).
How:   Stateless classes with one shared module-level instance each; every
       method takes the request's AsyncSession as its first argument and
       never commits (get_db_session commits once per request).

Service Inventory:
    - AuthService:         registration and login
    - UserService:         profiles and their activity stats
    - QuestionService:     questions, tag counters, cascade delete, activity feed
    - AnswerService:       answers, answer_count, acceptance
    - VoteService:         toggle/flip voting and vote_count recomputation
    - TagService:          find-or-create tags and question_count
    - NotificationService: answer/accept notifications and the inbox
    - pagination:          page/offset math shared by every list endpoint
"""
