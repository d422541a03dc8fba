"""Registration request and the field-level validation context."""

from dataclasses import dataclass, field

from domain.model.user import User


@dataclass
class RegistrationRequest:
    """Registration form data as submitted by the user."""
    username: str
    email: str
    password: str | None
    password_confirm: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    def create_user(self) -> User:
        """Build an unsaved User carrying the plaintext password.

        The caller hashes the password before the user is persisted.
        """
        return User(
            username=self.username,
            email=self.email,
            password_hash=self.password or '',
            first_name=self.first_name,
            last_name=self.last_name,
        )


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationErrors:
    """Ordered collection of field errors collected while validating a form."""
    errors: list[FieldError] = field(default_factory=list)

    def reject(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field=field_name, message=message))

    def add(self, error: FieldError) -> None:
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def for_field(self, field_name: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field_name]

    def as_dict(self) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for error in self.errors:
            result.setdefault(error.field, []).append(error.message)
        return result

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
