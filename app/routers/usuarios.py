from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.dependencies import credentials_body, get_user_store, password_body
from app.schemas.user import PasswordUpdate, UserCredentials, UserResponse
from app.services.user_store import UserStore
from app.utils.exceptions import PersistenceError

router = APIRouter(prefix="/usuarios", tags=["usuarios"])


def _serialize(user) -> dict:
    return UserResponse.model_validate(user).model_dump(by_alias=True)


@router.get("")
async def list_usuarios(store: UserStore = Depends(get_user_store)):
    return [_serialize(u) for u in await store.find_all()]


@router.get("/buscar/{usuario}")
async def buscar_usuario(usuario: str, store: UserStore = Depends(get_user_store)):
    try:
        user = await store.find_by_username(usuario)
    except PersistenceError as exc:
        raise PersistenceError("Error al buscar el usuario") from exc
    return _serialize(user)


@router.put("/modificar/{usuario}", response_class=PlainTextResponse)
async def modificar_usuario(
    usuario: str,
    payload: PasswordUpdate = Depends(password_body),
    store: UserStore = Depends(get_user_store),
):
    try:
        await store.update_by_username(usuario, payload.password)
    except PersistenceError as exc:
        raise PersistenceError("Error al modificar el usuario") from exc
    return "Usuario actualizado"


@router.delete("/eliminar/{usuario}", response_class=PlainTextResponse)
async def eliminar_usuario(usuario: str, store: UserStore = Depends(get_user_store)):
    try:
        await store.delete_by_username(usuario)
    except PersistenceError as exc:
        raise PersistenceError("Error al eliminar el usuario") from exc
    return "Usuario eliminado"


@router.get("/{user_id}")
async def get_usuario(user_id: str, store: UserStore = Depends(get_user_store)):
    return _serialize(await store.find_by_id(user_id))


@router.put("/{user_id}")
async def update_usuario(
    user_id: str,
    credentials: UserCredentials = Depends(credentials_body),
    store: UserStore = Depends(get_user_store),
):
    user = await store.update_by_id(user_id, credentials.usuario, credentials.password)
    return _serialize(user)


@router.delete("/{user_id}", response_class=PlainTextResponse)
async def delete_usuario(user_id: str, store: UserStore = Depends(get_user_store)):
    await store.delete_by_id(user_id)
    return "Usuario eliminado"
