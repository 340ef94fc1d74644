"""
Record types shared by the test suite.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel

from liteorm import Column, Model


class Address(BaseModel):
    city: str
    zip_code: str


class User(Model):
    uid: Annotated[Optional[int], Column(index=True)] = None
    name: Optional[str] = None
    age: Optional[int] = None
    vip: Optional[bool] = None
    labels: Annotated[Optional[List[str]], Column(json=True)] = None


class Book(Model):
    name: Optional[str] = None
    author: Optional[str] = None
    price: Optional[float] = None


class Profile(Model):
    nickname: str = "anonymous"
    score: float = 0.0
    level: int = 1
    active: bool = True
    address: Annotated[Optional[Address], Column(json=True)] = None
    settings: Annotated[Dict[str, int], Column(json=True)] = {}
    session_token: Annotated[Optional[str], Column(ignore=True)] = None


class Auditable(Model):
    author: Optional[str] = None


class Article(Auditable):
    title: Optional[str] = None


class Sensor(Model):
    code: str
    reading: float
