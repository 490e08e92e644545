import string

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Enough distinct handles for any realistic program plus mid-batch additions
MIN_HANDLE_SPACE = 1000


class Settings(BaseSettings):
    handle_length: int = Field(default=4, ge=1)
    handle_alphabet: str = Field(default=string.ascii_letters + string.digits)
    max_program_weeks: int = Field(default=4, ge=1)
    default_rest_seconds: int = Field(default=180, ge=0)
    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None)
    log_json: bool = Field(default=False)
    configure_logging: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PROGRAM_TOOLS_",
        extra="ignore",
    )

    @field_validator("handle_alphabet")
    @classmethod
    def validate_alphabet(cls, value: str) -> str:
        if len(set(value)) < 2:
            raise ValueError("PROGRAM_TOOLS_HANDLE_ALPHABET must contain at least two distinct characters.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def validate_handle_space(self) -> "Settings":
        space = len(set(self.handle_alphabet)) ** self.handle_length
        if space < MIN_HANDLE_SPACE:
            raise ValueError(
                f"Handle alphabet and length allow only {space} distinct handles; at least {MIN_HANDLE_SPACE} required."
            )
        return self


settings = Settings()
