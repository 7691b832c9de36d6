# heymies/main.py
# uvicorn heymies.main:app --reload
from .entrypoints.fastapi_app import create_app

app = create_app()
