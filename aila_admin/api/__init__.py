"""
API Package - FastAPI Routers • Models • JWT Utils • Generation Client
======================================================================

Mission
-------
This package defines the backend's HTTP interface and its support stack:
FastAPI routing, bearer-token auth and the client of the external
text-generation service.

Contents
--------
- routers
    One FastAPI router per service: health, accounts, books, directory,
    kyc, conversations.

- models
    Pydantic request contracts (registration, login, directory edits, KYC
    rejection, conversation and turn bodies).

- utils
    JWT helpers:
      • create_access_token(payload) - issues signed JWTs with exp
      • verify_token(token) - validates JWTs and returns their claims

- security
    `current_identity` / `require_admin` dependencies resolving the
    `Authorization: Bearer` header.

- generation
    `GenerationClient` (httpx) posting the conversation window to the
    generation service, with the fallback reply on any failure.
"""
