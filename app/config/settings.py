# app/config/settings.py
from pydantic import BaseModel
from pydantic_settings import BaseSettings
from typing import List, Optional


class TransferRoute(BaseModel):
    """Extra recipients for transfers between an exact pair of locations"""
    transfer_from: str
    transfer_to: str
    recipients: List[str]


class Settings(BaseSettings):
    # App Info
    app_name: str = "Inventory Transfer API"
    version: str = "1.0.0"
    debug: bool = False

    # Database - DATABASE_URL wins over the discrete parameters
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "inventory"
    db_user: str = "postgres"
    db_password: str = ""

    # Mail relay
    email_host: str = "localhost"
    email_port: int = 587
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    # Sender address; falls back to the login user
    email_from: Optional[str] = None

    # Recipients
    inventory_officer_email: str = ""
    inventory_tech_email: Optional[str] = None
    transfer_routes: Optional[List[TransferRoute]] = None

    # Server
    cors_origins: List[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3030

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL using the psycopg driver"""
        if self.database_url:
            url = self.database_url
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            if url.startswith("postgresql://"):
                url = "postgresql+psycopg://" + url[len("postgresql://"):]
            return url
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def requires_ssl(self) -> bool:
        # Hosted databases are reached through a connection string
        return bool(self.database_url) and self.database_url.startswith("postgres")

    @property
    def sender_address(self) -> Optional[str]:
        return self.email_from or self.email_user

    @property
    def recipient_routes(self) -> List[TransferRoute]:
        if self.transfer_routes is not None:
            return self.transfer_routes
        if not self.inventory_tech_email:
            return []
        return [
            TransferRoute(
                transfer_from="Groskopf",
                transfer_to="Donum - Tasting Room",
                recipients=[self.inventory_tech_email],
            )
        ]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
