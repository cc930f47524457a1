"""Opening-hours status for an establishment."""

from datetime import datetime
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from ..config import app_config
from ..models.establishment import BusinessHour, BusinessStatus
from ..utils.time_utils import resolve_now


DAY_NAMES = [
    'Domingo',
    'Segunda-feira',
    'Terça-feira',
    'Quarta-feira',
    'Quinta-feira',
    'Sexta-feira',
    'Sábado',
]

DEFAULT_SCHEDULED_MESSAGE = 'Seu pedido será preparado quando reabrirmos.'


def format_time(value: Optional[str]) -> str:
    """'HH:MM:SS' or 'HH:MM' -> 'HH:MM'."""
    if not value:
        return ''
    return value[:5]


def _hours_for(hours: List[BusinessHour], day: int) -> Optional[BusinessHour]:
    for entry in hours:
        if entry.day_of_week == day:
            return entry
    return None


def _is_configured(entry: Optional[BusinessHour]) -> bool:
    return bool(entry and entry.is_open and entry.opening_time and entry.closing_time)


class HoursService:
    """Computes open/closed status from weekly opening hours."""
    
    @staticmethod
    def local_now(now: Optional[datetime] = None, tz: Optional[str] = None) -> datetime:
        return resolve_now(now).astimezone(ZoneInfo(tz or app_config.timezone))
    
    @staticmethod
    def check_business_status(
        hours: Iterable[BusinessHour],
        now: Optional[datetime] = None,
        tz: Optional[str] = None
    ) -> BusinessStatus:
        """Return whether the establishment is open at ``now``.
        
        No configured hours means always open. Ranges whose closing time is
        earlier than the opening time run past midnight, so yesterday's
        range is checked as well.
        """
        hours = list(hours)
        if not hours:
            return BusinessStatus(is_open=True, message='Aberto')
        
        local = HoursService.local_now(now, tz)
        current_day = (local.weekday() + 1) % 7  # Sunday = 0
        current_time = local.strftime('%H:%M')
        
        today = _hours_for(hours, current_day)
        today_hours = None
        if _is_configured(today):
            open_time = format_time(today.opening_time)
            close_time = format_time(today.closing_time)
            today_hours = f"{open_time} - {close_time}"
            
            if close_time < open_time:
                is_open = current_time >= open_time or current_time < close_time
            else:
                is_open = open_time <= current_time < close_time
            
            if is_open:
                return BusinessStatus(
                    is_open=True,
                    message=f"Aberto agora · até {close_time}",
                    today_hours=today_hours
                )
        
        yesterday = _hours_for(hours, (current_day - 1) % 7)
        if _is_configured(yesterday):
            open_time = format_time(yesterday.opening_time)
            close_time = format_time(yesterday.closing_time)
            if close_time < open_time and current_time < close_time:
                return BusinessStatus(
                    is_open=True,
                    message=f"Aberto agora · até {close_time}",
                    today_hours=today_hours
                )
        
        if _is_configured(today) and current_time < format_time(today.opening_time):
            open_time = format_time(today.opening_time)
            return BusinessStatus(
                is_open=False,
                message=f"Fechado · abre hoje às {open_time}",
                today_hours=today_hours,
                next_open_info=f"Abre hoje às {open_time}"
            )
        
        next_open = HoursService.find_next_open(hours, current_day)
        return BusinessStatus(
            is_open=False,
            message=f"Fechado · {next_open.lower()}" if next_open else 'Fechado',
            today_hours=today_hours,
            next_open_info=next_open
        )
    
    @staticmethod
    def find_next_open(hours: Iterable[BusinessHour], current_day: int) -> Optional[str]:
        hours = list(hours)
        for offset in range(1, 8):
            day = (current_day + offset) % 7
            entry = _hours_for(hours, day)
            if entry and entry.is_open and entry.opening_time:
                day_name = 'amanhã' if offset == 1 else DAY_NAMES[day]
                return f"Abre {day_name} às {format_time(entry.opening_time)}"
        return None
    
    @staticmethod
    def scheduled_order_message(allow_orders_when_closed: bool, custom_message: Optional[str] = None) -> Optional[str]:
        if not allow_orders_when_closed:
            return None
        return custom_message or DEFAULT_SCHEDULED_MESSAGE
