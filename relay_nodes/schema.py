from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Callable, Dict, List, Literal, Optional, Any


class AuthSpec(BaseModel):
    type: Literal["bearer", "bot", "header", "query"] = "bearer"
    credential: str = "accessToken"
    name: Optional[str] = None
    message: str = "Access token is required"

    @model_validator(mode="after")
    def name_required_for_header_or_query(self):
        if self.type in ("header", "query") and not self.name:
            raise ValueError(f"auth type {self.type!r} needs a header or parameter name")
        return self


class HttpCall(BaseModel):
    method: Literal["GET", "POST"] = "GET"
    path: str
    params: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    json_body: Optional[Any] = None
    content: Optional[str] = None


class Exchange(BaseModel):
    """What an extractor sees: the caller's parameters and what the provider sent back."""

    params: Dict[str, Any]
    payload: Any = None
    follow_ups: List[Any] = Field(default_factory=list)
    timestamp: str


class ActionSpec(BaseModel):
    name: str
    title: str
    doc: Optional[str] = None
    required: Dict[str, str] = Field(default_factory=dict)
    auth: Optional[AuthSpec] = None
    status_hints: Dict[int, str] = Field(default_factory=dict)
    request: Callable[[Dict[str, Any]], HttpCall]
    follow_up: Optional[Callable[[Dict[str, Any], Any], List[HttpCall]]] = None
    follow_up_strict: bool = True
    extract: Callable[[Exchange], Dict[str, Any]]


class ProviderSpec(BaseModel):
    name: str
    title: str
    base_url: str = ""
    doc: Optional[str] = None
    auth: AuthSpec = AuthSpec()
    action_field: str = "action"
    unsupported_label: str = "action"
    required: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    error_fields: List[str] = Field(default_factory=lambda: ["error.message"])
    status_hints: Dict[int, str] = Field(default_factory=dict)
    actions: Dict[str, ActionSpec]

    @field_validator("actions")
    def action_keys_match_names(cls, v):
        for key, action in v.items():
            if key != action.name:
                raise ValueError(f"action registered as {key!r} is named {action.name!r}")
        return v

    def qualified(self, action: str) -> str:
        return f"{self.name}.{action}"


class ActionResult(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, data: Any) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, status_code: int = 400) -> "ActionResult":
        return cls(success=False, error=error, status_code=status_code)

    def envelope(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
