# app/core/client_config.py
from pydantic import BaseModel

from app.core.config import Settings


class FirebaseClientConfig(BaseModel):
    apiKey: str
    authDomain: str
    databaseURL: str
    projectId: str
    storageBucket: str
    messagingSenderId: str
    appId: str
    measurementId: str


class FunctionUrls(BaseModel):
    analyzeWineLabel: str
    searchWineImage: str
    health: str


class ClientConfig(BaseModel):
    """前端（The Cork web app）讀的靜態設定：Firebase 連線參數 + 三個 function URL。"""
    FIREBASE: FirebaseClientConfig
    FUNCTIONS: FunctionUrls


def build_client_config(settings: Settings) -> ClientConfig:
    project = settings.CLIENT_FIREBASE_PROJECT_ID
    base = settings.functions_base_url
    return ClientConfig(
        FIREBASE=FirebaseClientConfig(
            apiKey=settings.CLIENT_FIREBASE_API_KEY,
            authDomain=f"{project}.firebaseapp.com",
            databaseURL=settings.CLIENT_FIREBASE_DATABASE_URL,
            projectId=project,
            storageBucket=f"{project}.firebasestorage.app",
            messagingSenderId=settings.CLIENT_FIREBASE_MESSAGING_SENDER_ID,
            appId=settings.CLIENT_FIREBASE_APP_ID,
            measurementId=settings.CLIENT_FIREBASE_MEASUREMENT_ID,
        ),
        FUNCTIONS=FunctionUrls(
            analyzeWineLabel=f"{base}/analyzeWineLabel",
            searchWineImage=f"{base}/searchWineImage",
            health=f"{base}/health",
        ),
    )
