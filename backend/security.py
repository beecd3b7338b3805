import hashlib
import hmac
import os
import secrets

# Em produção, este SALT deve vir de variáveis de ambiente seguras
PASSWORD_SALT = os.getenv("PASSWORD_SALT", "login_api_salt_dev")

def hash_password(password: str) -> str:
    """Gera hash SHA256 com salt para armazenamento"""
    salted = f"{password}{PASSWORD_SALT}"
    return hashlib.sha256(salted.encode()).hexdigest()

def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)

def issue_token() -> str:
    return secrets.token_urlsafe(32)

def parse_bearer(authorization: str) -> str:
    """Extrai o token de um header 'Bearer <token>' (vazio se inválido)"""
    if not authorization:
        return ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()
