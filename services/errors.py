"""Domain errors shared by the store services.

Routes recognise these by kind and map them to HTTP status codes; anything
else is treated as an internal failure.
"""


class StoreError(Exception): ...


class ValidationError(StoreError): ...
class InvalidAmount(ValidationError): ...


class Unauthorized(StoreError): ...
class InvalidToken(StoreError): ...


class NotFound(StoreError): ...
class UserNotFound(NotFound): ...
class MerchNotFound(NotFound): ...


class BusinessRuleError(StoreError): ...
class InsufficientFunds(BusinessRuleError): ...
class InvalidRecipient(BusinessRuleError): ...
