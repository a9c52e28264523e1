"""
Модуль: `extensions.py`.
Назначение: Инициализация и экспорт экземпляров Flask-расширений.
"""

from flask_cors import CORS

# Расширения создаём здесь и инициализируем в фабрике приложения
cors = CORS()
