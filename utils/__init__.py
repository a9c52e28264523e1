"""
Модуль: `utils/__init__.py`.
Назначение: Ядро палитры: выборка пикселей, квантизация, цветовые пространства и экспорт.
"""
