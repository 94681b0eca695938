"""
The `database` package is responsible for all interactions with the application's databases.
It provides configuration, entity definitions, CRUD operations, and the service functions
that the API routers call.

Contents:
    - config:
        Settings and the SQLAlchemy engines/declarative bases of the main
        database and the lawyer database.

    - entities:
        SQLAlchemy entity models representing the database tables.

    - daos:
        Data Access Objects (DAOs) providing data access for the entities.

    - core:
        Service functions that connect application routers with the database
        and orchestrate higher-level operations (accounts, books, directory,
        KYC, conversations).

    - helpers:
        Transaction decorators and shared query helpers (paging, sorting,
        search, id parsing).
"""
