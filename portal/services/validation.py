"""
Field validators, formatters and whole-form aggregators for registration and login.

Validators never raise: they return a bool or a result object. Aggregators run
every check in a fixed order and collect every failing rule's message, so the
client can show all problems at once. Messages are user-facing (pt-BR).
"""

import re
from dataclasses import dataclass, field

from portal.models import ROLES
from portal.schemas.auth import LoginRequest, RegisterRequest
from portal.schemas.users import UserUpdateRequest

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")

PASSWORD_MIN_LEN = 8
CEP_LEN = 8
CNPJ_LEN = 14
PHONE_LENGTHS = (10, 11)

# Check-digit weights over the first 12 and first 13 CNPJ digits.
CNPJ_WEIGHTS_1 = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_WEIGHTS_2 = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)

BUSINESS_TYPES = (
    "Restaurante",
    "Bar",
    "Lanchonete",
    "Pizzaria",
    "Sorveteria",
    "Café",
    "Padaria",
    "Food Truck",
    "Delivery",
    "Outro",
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: valid iff no errors were collected."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# Same shape; kept as its own name for the password policy.
PasswordValidation = ValidationResult


def only_digits(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value or "")


# ── Field validators ────────────────────────────────────────────────
def validate_email(email: str) -> bool:
    """Pragmatic local@domain.tld shape check; no DNS or MX lookup."""
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_cep(cep: str) -> bool:
    return len(only_digits(cep)) == CEP_LEN


def validate_phone(phone: str) -> bool:
    """10 digits for a landline, 11 for a mobile number (area code included)."""
    return len(only_digits(phone)) in PHONE_LENGTHS


def _cnpj_check_digit(digits: str, weights: tuple[int, ...]) -> int:
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cnpj(cnpj: str) -> bool:
    """
    Validate a CNPJ (Brazilian company tax id), formatted or not.

    Rejects anything that is not 14 digits and the 14-identical-digit
    sequences, which satisfy the checksum but are never issued.
    """
    digits = only_digits(cnpj)
    if len(digits) != CNPJ_LEN:
        return False
    if len(set(digits)) == 1:
        return False
    if _cnpj_check_digit(digits[:12], CNPJ_WEIGHTS_1) != int(digits[12]):
        return False
    return _cnpj_check_digit(digits[:13], CNPJ_WEIGHTS_2) == int(digits[13])


def validate_password(password: str) -> PasswordValidation:
    """Return every violated password rule, not only the first."""
    password = password or ""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LEN:
        errors.append("Mínimo de 8 caracteres")
    if not re.search(r"[A-Za-z]", password):
        errors.append("Pelo menos 1 letra")
    if not re.search(r"[0-9]", password):
        errors.append("Pelo menos 1 número")
    return PasswordValidation(errors=errors)


# ── Formatters ──────────────────────────────────────────────────────
def format_cep(cep: str) -> str:
    digits = only_digits(cep)
    if len(digits) != CEP_LEN:
        return cep
    return f"{digits[:5]}-{digits[5:]}"


def format_cnpj(cnpj: str) -> str:
    digits = only_digits(cnpj)
    if len(digits) != CNPJ_LEN:
        return cnpj
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def format_phone(phone: str) -> str:
    digits = only_digits(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


# ── Form aggregators ────────────────────────────────────────────────
def validate_register_form(data: RegisterRequest) -> ValidationResult:
    errors: list[str] = []

    if not data.email:
        errors.append("Email é obrigatório")
    elif not validate_email(data.email):
        errors.append("Email inválido")

    errors.extend(validate_password(data.password).errors)

    if data.password != data.confirm_password:
        errors.append("As senhas não coincidem")

    if not data.cnpj:
        errors.append("CNPJ é obrigatório")
    elif not validate_cnpj(data.cnpj):
        errors.append("CNPJ inválido")

    if not data.cep:
        errors.append("CEP é obrigatório")
    elif not validate_cep(data.cep):
        errors.append("CEP inválido")

    if not data.phone:
        errors.append("Telefone é obrigatório")
    elif not validate_phone(data.phone):
        errors.append("Telefone inválido")

    if not data.business_types:
        errors.append("Selecione pelo menos um tipo de negócio")

    return ValidationResult(errors=errors)


def validate_login_form(data: LoginRequest) -> ValidationResult:
    """Login only needs a well-formed email and a non-empty password; no strength check."""
    errors: list[str] = []

    if not data.email:
        errors.append("E-mail é obrigatório")
    elif not validate_email(data.email):
        errors.append("E-mail inválido")

    if not data.password:
        errors.append("Senha é obrigatória")

    return ValidationResult(errors=errors)


def validate_user_update(data: UserUpdateRequest) -> ValidationResult:
    errors: list[str] = []

    if not data.user_id:
        errors.append("Usuário é obrigatório")
    if data.name is not None and not data.name.strip():
        errors.append("Nome é obrigatório")
    if data.email is not None and not validate_email(data.email):
        errors.append("E-mail inválido")
    if data.role is not None and data.role not in ROLES:
        errors.append("Perfil inválido")

    return ValidationResult(errors=errors)
