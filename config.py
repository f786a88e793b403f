import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Veri Dosyası Ayarları
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "library_data.json")
    export_dir: str = os.getenv("LIBRARY_EXPORT_DIR", ".")
    admins_export_file: str = os.getenv("ADMINS_EXPORT_FILE", "Library_Admins.txt")
    books_export_file: str = os.getenv("BOOKS_EXPORT_FILE", "Library_Books.txt")
    users_export_file: str = os.getenv("USERS_EXPORT_FILE", "Library_Users.txt")

    # Ödünç Alma Kuralları
    max_books_per_user: int = int(os.getenv("MAX_BOOKS_PER_USER", "5"))
    loan_period_days: int = int(os.getenv("LOAN_PERIOD_DAYS", "14"))

    # Varsayılan Yönetici Hesabı (kullanıcı deposu boşken oluşturulur)
    default_admin_username: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    default_admin_password: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
    default_admin_name: str = os.getenv("DEFAULT_ADMIN_NAME", "System Admin")
    default_admin_email: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@library.local")

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Library Manager")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")


settings = Settings()
