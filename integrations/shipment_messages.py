"""
Chat message rendering for parsed shipments, with i18n support.

Two readouts, both HTML for chat clients:
- render_task_summary: short per-task card sent to the driver
- render_shipment: full document readout for the manager

Usage:
    from integrations.shipment_messages import render_shipment_message

    html = render_shipment_message(shipment, language="en")
"""

from datetime import datetime
from html import escape
from typing import Optional

from config import settings
from models.shipment import Shipment, TaskSection, TaskType
from parsers.countries import extract_country

DATE_FORMAT = "%Y-%m-%d %H:%M"

MESSAGES = {
    "en": {
        # Shipment header
        "shipment_id": "Shipment",
        "instruction_type": "Instruction type",
        "doc_lang": "Document language",
        "car_id": "Truck",
        "driver_name": "Driver",
        "container": "Container",
        "chassis": "Chassis",
        "tank_details": "Tank details",
        "general_remark": "General remark",

        # Task fields
        "task": "Task",
        "address": "Address",
        "destination_address": "Delivery address",
        "tank_status": "Tank status",
        "customer_reference": "Customer reference",
        "company": "On behalf of",
        "load_reference": "Load reference",
        "unload_reference": "Unload reference",
        "load_start": "Expected load start",
        "load_end": "Expected load end",
        "unload_start": "Expected unload start",
        "unload_end": "Expected unload end",
        "product": "Product",
        "weight": "Weight",
        "volume": "Volume",
        "temperature": "Temperature",
        "compartment": "Compartments",
        "remark": "Remark",

        "review_hint": "⚠️ {count} field(s) could not be read, please review the document.",

        # Task types
        "task_load": "Load",
        "task_unload": "Unload",
        "task_collect": "Collect",
        "task_dropoff": "Drop off",
        "task_cleaning": "Cleaning",
    },
    "uk": {
        # Shipment header
        "shipment_id": "Номер маршрут",
        "instruction_type": "Тип інструкції",
        "doc_lang": "Мова документу",
        "car_id": "№ Авто",
        "driver_name": "Імʼя водія",
        "container": "Контейнер",
        "chassis": "Шасі",
        "tank_details": "Про контейнер",
        "general_remark": "Загальна нотатка",

        # Task fields
        "task": "Завдання",
        "address": "Адреса",
        "destination_address": "Адреса доставки",
        "tank_status": "Статус контейнера",
        "customer_reference": "Customer референс",
        "company": "За дорученням",
        "load_reference": "Load референс",
        "unload_reference": "Unload референс",
        "load_start": "Очікуваний початок завантаження (Load)",
        "load_end": "Очікуваний кінець завантаження (Load)",
        "unload_start": "Очікуваний початок розвантаження (Unload)",
        "unload_end": "Очікуваний кінець розвантаження (Unload)",
        "product": "Продукт",
        "weight": "Вага",
        "volume": "Обʼєм",
        "temperature": "Температура",
        "compartment": "Кількість секцій",
        "remark": "Нотатка",

        "review_hint": "⚠️ Не вдалося прочитати полів: {count}. Перевірте документ.",

        # Task types
        "task_load": "Завантаження",
        "task_unload": "Розвантаження",
        "task_collect": "Забрати контейнер",
        "task_dropoff": "Залишити контейнер",
        "task_cleaning": "Мийка",
    },
}


def get_message(key: str, language: Optional[str] = None, **kwargs) -> str:
    """
    Get translated text and format it with kwargs.

    Falls back to English, then to the key itself.
    """
    lang_messages = MESSAGES.get(language or settings.message_language, MESSAGES["en"])
    template = lang_messages.get(key, MESSAGES["en"].get(key, key))
    return template.format(**kwargs) if kwargs else template


def _line(key: str, value, language: Optional[str]) -> str:
    return f"<b>{get_message(key, language)}</b>: {escape(str(value))}\n"


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def task_title(task_type: TaskType, language: Optional[str] = None) -> str:
    return get_message(f"task_{task_type.value}", language)


def render_task_summary(task: TaskSection, language: Optional[str] = None) -> str:
    """
    Short card for one task: address with country, references, time
    window and cargo.
    """
    result = ""

    if task.address:
        address = task.address
        country = extract_country(task.address)
        if country:
            address = f"{address}; {country.name} {country.flag}"
        result += _line("address", address, language)

    if task.customer_reference:
        result += _line("customer_reference", task.customer_reference, language)
    if task.load_reference:
        result += _line("load_reference", task.load_reference, language)
    if task.unload_reference:
        result += _line("unload_reference", task.unload_reference, language)

    if task.load_start_date:
        result += _line("load_start", _format_date(task.load_start_date), language)
        result += _line("load_end", _format_date(task.load_end_date), language)
    elif task.unload_start_date:
        result += _line("unload_start", _format_date(task.unload_start_date), language)
        result += _line("unload_end", _format_date(task.unload_end_date), language)

    if task.product:
        result += _line("product", task.product, language)
        result += _line("weight", task.weight, language)
        result += _line("volume", task.volume, language)
        if task.temperature:
            result += _line("temperature", task.temperature, language)

    return result


def _render_task_details(task: TaskSection, language: Optional[str]) -> str:
    result = ""

    if task.address:
        result += _line("address", task.address, language)
    if task.destination_address:
        result += _line("destination_address", task.destination_address, language)
    if task.tank_status:
        result += _line("tank_status", task.tank_status, language)

    if task.customer_reference:
        result += _line("customer_reference", task.customer_reference, language)
    if task.company:
        result += _line("company", task.company, language)

    if task.load_reference or task.load_start_date:
        if task.load_reference:
            result += _line("load_reference", task.load_reference, language)
        result += _line("load_start", _format_date(task.load_start_date), language)
        result += _line("load_end", _format_date(task.load_end_date), language)

    if task.unload_reference or task.unload_start_date:
        if task.unload_reference:
            result += _line("unload_reference", task.unload_reference, language)
        result += _line("unload_start", _format_date(task.unload_start_date), language)
        result += _line("unload_end", _format_date(task.unload_end_date), language)

    if task.product:
        result += _line("product", task.product, language)
        result += _line("weight", task.weight, language)
        result += _line("volume", task.volume, language)
        if task.temperature:
            result += _line("temperature", task.temperature, language)
        result += _line("compartment", task.compartment, language)

    if task.remark:
        result += _line("remark", task.remark.rstrip(), language)

    return result


def render_shipment(
    shipment: Shipment,
    language: Optional[str] = None,
) -> tuple[str, list[tuple[TaskType, str]]]:
    """
    Full readout of a parsed shipment.

    Returns:
        (header block, [(task type, task block), ...] in task order)
    """
    header = ""
    header += _line("shipment_id", shipment.shipment_id, language)
    header += _line(
        "instruction_type",
        shipment.instruction_type.value if shipment.instruction_type else "",
        language,
    )
    header += _line("doc_lang", shipment.doc_lang.value if shipment.doc_lang else "", language)
    header += _line("car_id", shipment.car_id, language)
    header += _line("driver_name", shipment.driver_name, language)
    header += _line("container", shipment.container, language)
    if shipment.chassis:
        header += _line("chassis", shipment.chassis, language)
    header += _line("tank_details", shipment.tank_details, language)
    header += _line("general_remark", shipment.general_remark, language)

    tasks = [(task.task_type, _render_task_details(task, language)) for task in shipment.tasks]
    return header, tasks


def render_shipment_message(shipment: Shipment, language: Optional[str] = None) -> str:
    """Header, every task block and a review hint joined into one message."""
    header, tasks = render_shipment(shipment, language)

    message = header + "\n"
    for task_type, body in tasks:
        message += f"<i><b>{get_message('task', language)}: {task_title(task_type, language)}</b></i>\n\n"
        message += body + "\n"

    if shipment.has_warnings:
        message += get_message("review_hint", language, count=len(shipment.warnings)) + "\n"

    return message
