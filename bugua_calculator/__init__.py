"""Модуль гадания 卜卦 по И-Цзин"""
from .calculator import BuguaCalculator
from .exceptions import InvalidInputError
from .models import BuguaQuestion, BuguaResult

__all__ = ['BuguaCalculator', 'BuguaQuestion', 'BuguaResult', 'InvalidInputError']
