import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.dependencies import credentials_body, get_user_store
from app.schemas.user import UserCredentials
from app.services.hasher import hasher
from app.services.user_store import UserStore
from app.utils.exceptions import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"], default_response_class=PlainTextResponse)


@router.post("/registrar")
async def registrar(
    credentials: UserCredentials = Depends(credentials_body),
    store: UserStore = Depends(get_user_store),
):
    logger.info("Registering user %s", credentials.usuario)
    try:
        await store.create(credentials.usuario, credentials.password)
    except PersistenceError as exc:
        raise PersistenceError("Error al registrar") from exc
    return "Usuario guardado"


@router.post("/autenticar")
async def autenticar(
    credentials: UserCredentials = Depends(credentials_body),
    store: UserStore = Depends(get_user_store),
):
    logger.info("Authenticating user %s", credentials.usuario)
    try:
        user = await store.find_by_username(credentials.usuario)
    except NotFoundError:
        return "El usuario no se encuentra registrado"

    if await hasher.verify(credentials.password, user.password):
        return "El password es correcto"
    return "Contraseña incorrecta"
