"""
Pydantic models used for request validation and API data contracts.

Each class defines the structure of data expected in API endpoints, ensuring
validation and automatic OpenAPI schema generation. JSON bodies use the
dashboard's camelCase names (`fullName`, `practiceAreas`, ...) as aliases;
the snake_case field names are accepted too.

Fields that the service layer validates itself (required registration
fields, rejection reason, chat message) are declared optional here so that
a missing value is answered with the service's 400 rather than a 422.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterDetails(BaseModel):
    """
    Represents the details needed to register a new account.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    """Display name of the account holder."""
    username: Optional[str] = None
    """Unique username (stored lowercase, at least 3 characters)."""
    email: Optional[str] = None
    """Unique email address (stored lowercase)."""
    password: Optional[str] = None
    """The plaintext password (at least 6 characters); only its hash is stored."""
    phone: Optional[str] = None
    address: Optional[str] = None


class LoginCredentials(BaseModel):
    """
    Represents login credentials for an account.
    """
    email: str = ""
    """The email the account was registered with."""
    password: str = ""
    """The plaintext password provided for authentication."""


class AccountDirectoryUpdate(BaseModel):
    """
    Partial update of an account from the admin directory.
    Only the fields present in the request body are applied.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_admin: Optional[bool] = Field(None, alias="isAdmin")
    """Grants or revokes administrator rights."""


class LawyerDirectoryUpdate(BaseModel):
    """
    Partial update of a lawyer record from the admin directory.
    Only the fields present in the request body are applied.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    practice_areas: Optional[List[str]] = Field(None, alias="practiceAreas")
    """Areas of practice, e.g. ["Criminal law", "GDPR"]."""
    office_address: Optional[str] = Field(None, alias="officeAddress")
    role: Optional[str] = None


class KycRejection(BaseModel):
    """
    Body of a KYC rejection.
    """
    reason: Optional[str] = None
    """Why the submission is rejected. Required, trimmed before storage."""


class ConversationCreationDetails(BaseModel):
    """
    Represents details needed to create a new conversation.
    """
    title: Optional[str] = None
    """A human-readable title for the conversation ("New chat" when omitted)."""


class NewTurn(BaseModel):
    """
    Represents a new user message posted to a conversation.
    """
    message: Optional[str] = None
    """The text content of the message."""


class TurnEdit(BaseModel):
    """
    Replacement text of an existing turn.
    """
    text: str
    """The new text content of the turn."""
