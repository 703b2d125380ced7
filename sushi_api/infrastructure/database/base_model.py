# sushi_api/infrastructure/database/base_model.py

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

# BIGINT não é autoincrement no sqlite (usado nos testes)
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


class BaseModel(DeclarativeBase):
    pass
