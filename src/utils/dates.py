"""
Calendar date helpers for the DD/MM/YYYY textual form.
"""
from datetime import date, datetime
from typing import List

DATE_FORMAT = '%d/%m/%Y'

MONTHS = [
    'janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho',
    'julho', 'agosto', 'setembro', 'outubro', 'novembro', 'dezembro'
]


class DateFormatter:
    """Formats, parses and orders DD/MM/YYYY dates."""

    @staticmethod
    def format_date(value: date) -> str:
        """Format a date as DD/MM/YYYY."""
        return value.strftime(DATE_FORMAT)

    @staticmethod
    def parse_date(text: str) -> date:
        """
        Parse a DD/MM/YYYY string into a date.

        Raises:
            ValueError: If the text is not a valid DD/MM/YYYY date
        """
        return datetime.strptime(text, DATE_FORMAT).date()

    @staticmethod
    def today() -> str:
        """Current local date as DD/MM/YYYY."""
        return DateFormatter.format_date(date.today())

    @staticmethod
    def format_extended(text: str) -> str:
        """
        Long form used on article pages.

        Args:
            text: Date as DD/MM/YYYY

        Returns:
            e.g. "05 de março de 2024"
        """
        day, month, year = text.split('/')
        return f"{day} de {MONTHS[int(month) - 1]} de {year}"

    @staticmethod
    def sort_by_recency(items: List) -> List:
        """
        Order items by their created_at date, newest first.

        The sort is stable: items sharing a date keep their relative order.

        Args:
            items: Objects exposing a DD/MM/YYYY ``created_at`` attribute

        Returns:
            New sorted list
        """
        return sorted(items, key=lambda item: DateFormatter.parse_date(item.created_at), reverse=True)
