"""
Модуль: `routes/__init__.py`.
Назначение: HTTP-маршруты приложения.
"""
