# menu_api - бэкенд меню ресторана (FastAPI + MongoDB + S3).
__version__ = "0.1.0"
