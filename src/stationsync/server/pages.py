"""Informational landing page."""

from __future__ import annotations

import html

_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("POST /sync", "مزامنة البيانات"),
    ("GET /stations", "عرض جميع المحطات"),
    ("GET /station/:name", "بيانات محطة محددة"),
    ("DELETE /station/:name", "حذف محطة"),
    ("GET /stats", "إحصائيات الخادم"),
    ("GET /health", "حالة الخادم"),
)

_TEMPLATE = """<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
    <meta charset="utf-8">
    <title>خادم محطات الضخ</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        h1 {{ color: #2c3e50; }}
        .endpoint {{ background: #f5f5f5; padding: 10px; margin: 10px 0; border-radius: 5px; }}
    </style>
</head>
<body>
    <h1>خادم محطات الضخ</h1>
    <p>الخادم يعمل بنجاح على المنفذ {port}</p>
    <p>عدد المحطات المخزنة: {station_count}</p>
    <p>نقاط النهاية المتاحة:</p>
{endpoints}
</body>
</html>
"""


def render_index(*, port: int, station_count: int) -> str:
    endpoints = "\n".join(
        f'    <div class="endpoint"><strong>{html.escape(route)}</strong> - {html.escape(label)}</div>'
        for route, label in _ENDPOINTS
    )
    return _TEMPLATE.format(port=port, station_count=station_count, endpoints=endpoints)
