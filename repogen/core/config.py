from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="REPOGEN_", extra="ignore")

    log_level: str = "WARNING"

    build_command: str = "dotnet build"
    build_configuration: str = "Debug"
    metadata_exporter: str = "efr-export"

    context_base_types: List[str] = [
        "Microsoft.EntityFrameworkCore.DbContext",
        "System.Data.Entity.DbContext",
    ]
    collection_marker: str = "DbSet"

settings = Settings()
