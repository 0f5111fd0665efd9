"""
Управление проектом - CLI команды.

Использование:
    python manage.py runserver
    python manage.py create-tables
    python manage.py check-db
    python manage.py reset-db
    python manage.py seed-db
"""

import argparse

import uvicorn

from blog import config
from blog.core.database import Database
from blog.core.logging_config import setup_logging
from blog.core.models import User
from blog.core.security import hash_password
from blog.services.stores import CredentialStore


def runserver():
    """Запуск API на API_HOST:API_PORT"""
    from blog.main import create_app

    setup_logging()
    uvicorn.run(create_app(), host=config.API_HOST, port=config.API_PORT)


def check_db():
    """Проверка базы данных - показать всех пользователей"""
    database = Database(config.DATABASE_URL)
    db = database.session()

    try:
        users = db.query(User).all()

        print(f"\n📊 Всего пользователей в БД: {len(users)}\n")
        print("=" * 60)

        if not users:
            print("⚠️  База данных пустая.")
            print("   Зарегистрируйте пользователя через /register/\n")
            return

        for user in users:
            print(f"ID: {user.id}")
            print(f"Username: {user.username}")
            print(f"Пароль (хеш): {user.password_hash[:20]}...")
            print("-" * 60)

    finally:
        db.close()


def reset_db():
    """Сброс базы данных (удалить все таблицы и создать заново)"""
    print("⚠️  ВНИМАНИЕ: Это удалит все данные из БД!")
    confirm = input("Продолжить? (yes/no): ")

    if confirm.lower() != "yes":
        print("❌ Отменено")
        return

    database = Database(config.DATABASE_URL)
    database.drop_all()
    database.create_all()
    print("✅ База данных сброшена\n")


def seed_db():
    """Заполнить БД тестовыми пользователями"""
    database = Database(config.DATABASE_URL)
    database.create_all()
    db = database.session()

    test_users = [
        {"username": "user1", "password": "password123"},
        {"username": "user2", "password": "password123"},
        {"username": "admin", "password": "admin12345"},
    ]

    try:
        store = CredentialStore(db)
        for user_data in test_users:
            # Проверяем что пользователь ещё не существует
            if store.get_by_username(user_data["username"]) is not None:
                print(f"⚠️  Пользователь {user_data['username']} уже существует")
                continue

            store.add_user(user_data["username"], hash_password(user_data["password"]))
            print(f"✅ Создан пользователь: {user_data['username']}")
    finally:
        db.close()

    print("\n✅ Тестовые данные добавлены\n")


def create_tables():
    """Создать таблицы в БД (если их нет)"""
    Database(config.DATABASE_URL).create_all()
    print("✅ Таблицы созданы\n")


def main():
    """Главная функция - обработка команд"""
    parser = argparse.ArgumentParser(
        description="Управление проектом Blog API"
    )

    parser.add_argument(
        "command",
        choices=["runserver", "check-db", "reset-db", "seed-db", "create-tables"],
        help="Команда для выполнения"
    )

    args = parser.parse_args()

    # Выполнение команды
    commands = {
        "runserver": runserver,
        "check-db": check_db,
        "reset-db": reset_db,
        "seed-db": seed_db,
        "create-tables": create_tables,
    }

    commands[args.command]()


if __name__ == "__main__":
    main()
