"""
Entities Package - SQLAlchemy 2.0 ORM Models (UUID + UTC)
=========================================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes are consumed by DAOs (`daos` package).

Tech Stack & Conventions
------------------------
- Portable `Uuid` primary keys (native UUID on PostgreSQL)
- Timezone-aware timestamps (UTC), set explicitly in each `__init__`
- SQLAlchemy 2.0 style `Mapped[...]` + `mapped_column(...)`

Contents
--------
Main database (`declarativeBase`):

- Account (`app_account`): credentials, profile, admin flag, photo file name
- Book (`book`): catalog entry with PDF and poster file names
- Conversation (`conversation`): account-owned chat thread
- Turn (`conversation_turn`): one user or bot message, ordered by `position`

Lawyer database (`lawyerDeclarativeBase`):

- Lawyer (`lawyers`): externally owned directory record, loosely typed
- KycSubmission (`lawyer_kycs`): identity/licence verification request

Importing this package registers every model on its metadata.
"""

from aila_admin.database.entities.account import Account
from aila_admin.database.entities.book import Book
from aila_admin.database.entities.conversations import Conversation
from aila_admin.database.entities.turns import Turn
from aila_admin.database.entities.lawyer import Lawyer
from aila_admin.database.entities.kyc import KycSubmission

__all__ = ["Account", "Book", "Conversation", "Turn", "Lawyer", "KycSubmission"]
