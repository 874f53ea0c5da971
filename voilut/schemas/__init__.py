"""Pydantic 数据模型"""
from .voi import WindowSettings, DeviceLUT
