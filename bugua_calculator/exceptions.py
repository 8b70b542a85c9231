"""Исключения модуля гадания"""


class InvalidInputError(ValueError):
    """Некорректные входные данные для построения гексаграммы"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
