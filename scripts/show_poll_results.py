"""
Скрипт для вывода метаданных и результатов опроса.
"""
import asyncio
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.models.database import create_engine_from_settings, create_session_factory
from src.services.poll_service import PollService
from src.services.vote_service import VoteService
from src.utils.logging_setup import setup_logging


async def show_poll_results(poll_id: int) -> int:
    """Вывести результаты опроса. Возвращает код выхода."""
    engine = create_engine_from_settings()
    session_factory = create_session_factory(engine)

    try:
        async with session_factory() as session:
            poll_service = PollService(session)
            vote_service = VoteService(session)

            details = await poll_service.get_poll_details(poll_id)
            if not details:
                print(f"Опрос {poll_id} не найден")
                return 1

            poll = details.poll
            print("=" * 80)
            print(f"📊 {poll.title} (ID: {poll.id})")
            print("=" * 80)
            print(f"Автор: {details.creator_name}")
            print(f"Создан: {poll.created_at:%Y-%m-%d %H:%M} UTC")
            if poll.end_time:
                status = "закрыт" if details.is_closed else "активен"
                print(f"Окончание: {poll.end_time:%Y-%m-%d %H:%M} UTC ({status})")
            else:
                print("Окончание: нет (бессрочный)")
            print(f"Комментариев: {details.comment_count}")
            print(f"Всего голосов: {details.total_votes}")
            print()

            rows = await vote_service.tally(poll_id)
            for rank, row in enumerate(rows, start=1):
                print(f"{rank:>3}. {row.option_text:<50} {row.vote_count:>6} {row.percentage:>6.1f}%")
            return 0
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Показать результаты опроса")
    parser.add_argument("poll_id", type=int, help="ID опроса")

    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(show_poll_results(args.poll_id)))
