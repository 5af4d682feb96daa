# ==============================================================================
# COMANDOS DE ENTRADA - Datos que la presentación envía a los servicios
# ==============================================================================
# Cada operación de alta/modificación recibe un comando tipado (pydantic).
# Los comandos *Update tienen todos los campos opcionales: solo se aplican
# los campos enviados (exclude_unset); None explícito borra el valor.
# ==============================================================================

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationInfo, field_validator

from repair_pos.exceptions import ValidationError
from repair_pos.models.entities import InvoiceStatus, TicketStatus
from repair_pos.money import to_money


def _coerce_money(value):
    return value if value is None else to_money(value)


Money = Annotated[Decimal, BeforeValidator(_coerce_money)]
RequiredText = Annotated[str, Field(min_length=1)]

CommandT = TypeVar('CommandT', bound=BaseModel)


class Command(BaseModel):
    """Base de todos los comandos: recorta espacios y rechaza campos extra."""
    model_config = ConfigDict(str_strip_whitespace=True, extra='forbid')

    def changes(self) -> Dict[str, Any]:
        """Campos enviados (para merges parciales), incluidos los None explícitos."""
        return self.model_dump(exclude_unset=True)


class UpdateCommand(Command):
    """
    Base de los comandos *Update.

    Un campo omitido no cambia. Un None explícito borra el valor, y solo
    se acepta en los campos listados en NULLABLE.
    """
    NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @field_validator('*')
    @classmethod
    def _reject_null(cls, v, info: ValidationInfo):
        if v is None and info.field_name not in cls.NULLABLE:
            raise ValueError('no puede ser nulo')
        return v


def parse_command(
    command_cls: Type[CommandT],
    data: Union[CommandT, Dict[str, Any], None]
) -> CommandT:
    """
    Valida datos crudos contra un comando.

    Args:
        command_cls: Clase del comando
        data: Instancia ya construida o diccionario de formulario

    Returns:
        Instancia validada

    Raises:
        ValidationError: Con la lista de errores de pydantic en details
    """
    if isinstance(data, command_cls):
        return data
    try:
        return command_cls.model_validate(data or {})
    except pydantic.ValidationError as exc:
        errors = [
            {
                'field': '.'.join(str(p) for p in err.get('loc', ())),
                'error': err.get('msg', ''),
            }
            for err in exc.errors()
        ]
        fields = ', '.join(e['field'] or '?' for e in errors)
        raise ValidationError(
            f"Datos inválidos para {command_cls.__name__}: {fields}",
            {'errors': errors}
        ) from None


# ==============================================================================
# CLIENTES
# ==============================================================================

class ClientCreate(Command):
    name: RequiredText
    phone: RequiredText
    email: str = ''
    address: str = ''

    @field_validator('email', 'address', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return '' if v is None else v


class ClientUpdate(UpdateCommand):
    name: Optional[RequiredText] = None
    phone: Optional[RequiredText] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @field_validator('email', 'address', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return '' if v is None else v


# ==============================================================================
# TICKETS
# ==============================================================================

def _dedupe(tasks: List[str]) -> List[str]:
    seen = []
    for task in tasks:
        if task and task not in seen:
            seen.append(task)
    return seen


class TicketCreate(Command):
    client_id: RequiredText
    device_type: RequiredText
    brand: RequiredText
    model: RequiredText
    tasks: List[str] = Field(default_factory=list)
    issue: Optional[str] = None
    status: TicketStatus = TicketStatus.PENDING
    cost: Money = Field(default=Decimal('0.00'), ge=0)
    technician_id: str = ''
    passcode: Optional[str] = None

    @field_validator('tasks')
    @classmethod
    def _unique_tasks(cls, v):
        return _dedupe(v)


class TicketUpdate(UpdateCommand):
    NULLABLE: ClassVar[Tuple[str, ...]] = ('issue', 'passcode')

    client_id: Optional[RequiredText] = None
    device_type: Optional[RequiredText] = None
    brand: Optional[RequiredText] = None
    model: Optional[RequiredText] = None
    tasks: Optional[List[str]] = None
    issue: Optional[str] = None
    status: Optional[TicketStatus] = None
    cost: Optional[Money] = Field(default=None, ge=0)
    technician_id: Optional[str] = None
    passcode: Optional[str] = None

    @field_validator('tasks')
    @classmethod
    def _unique_tasks(cls, v):
        return None if v is None else _dedupe(v)

    @field_validator('technician_id', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return '' if v is None else v


# ==============================================================================
# PRODUCTOS
# ==============================================================================

class ProductCreate(Command):
    name: RequiredText
    category: str = ''
    price: Money = Field(default=Decimal('0.00'), ge=0)
    stock: int = 0
    sku: str = ''
    description: str = ''
    image_url: str = ''


class ProductUpdate(UpdateCommand):
    name: Optional[RequiredText] = None
    category: Optional[str] = None
    price: Optional[Money] = Field(default=None, ge=0)
    stock: Optional[int] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator('category', 'sku', 'description', 'image_url', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return '' if v is None else v


# ==============================================================================
# FACTURAS
# ==============================================================================

class InvoiceItemInput(Command):
    id: Optional[str] = None
    name: RequiredText
    quantity: int = Field(gt=0)
    price: Money = Field(gt=0)


class InvoiceCreate(Command):
    client_id: RequiredText
    date: Optional[datetime] = None
    items: List[InvoiceItemInput] = Field(min_length=1)
    subtotal: Optional[Money] = Field(default=None, ge=0)
    tax: Optional[Money] = Field(default=None, ge=0)
    total: Optional[Money] = Field(default=None, ge=0)
    status: InvoiceStatus = InvoiceStatus.PENDING


class InvoiceUpdate(UpdateCommand):
    NULLABLE: ClassVar[Tuple[str, ...]] = ('date',)

    client_id: Optional[RequiredText] = None
    date: Optional[datetime] = None
    items: Optional[List[InvoiceItemInput]] = Field(default=None, min_length=1)
    subtotal: Optional[Money] = Field(default=None, ge=0)
    tax: Optional[Money] = Field(default=None, ge=0)
    total: Optional[Money] = Field(default=None, ge=0)
    status: Optional[InvoiceStatus] = None
