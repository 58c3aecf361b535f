import bcrypt

# bcrypt читает не больше 72 байт пароля, более длинные bcrypt>=5 отвергает
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # в базе лежит не bcrypt-хеш или пароль длиннее 72 байт
        return False
