"""
DAOs Package - Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package provides the Data Access Layer for the application.
It encapsulates all interactions with SQLAlchemy ORM entities, providing
clean CRUD APIs for the service layer while hiding direct query details.

Conventions
-----------
- One DAO per entity, instantiated once per service module
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log and surface exceptions so upper layers decide error policy

Contents
--------
- AccountDao: create, fetch by id/email, uniqueness lookups, listing query, delete
- BookDao: create, fetch by id, list newest first, delete
- ConversationDao: create, fetch by id or owner, delete (with turns)
- TurnDao: append at next position, fetch all or trailing window, fetch one, bulk delete
- LawyerDao: fetch by id, listing query, delete (lawyer database)
- KycDao: fetch by id, listing query (lawyer database)
"""
