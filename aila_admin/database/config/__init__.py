"""
The `config` package provides two core building blocks for establishing and managing database connections.

Contents:
    - config: Configuration layer - strongly typed app settings loaded from environment variables (with .env support), exposed through a singleton Settings object
    - connection_engine: Database layer - SQLAlchemy bootstrap that creates the Engines of the main and lawyer databases, their MetaData, and their declarative bases
"""
