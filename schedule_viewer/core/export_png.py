from __future__ import annotations

import hashlib
from datetime import datetime
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .models import ClassRecord
from .schedule import format_period

PNG_THEME = {
    "dark": {
        "bg": "#0B0F14",
        "surface": "#161E2A",
        "marker": "#2563EB",
        "text": "#F3F6FB",
        "muted": "#9CA3AF",
        "border": "#263041",
    },
    "light": {
        "bg": "#EEF2F7",
        "surface": "#FFFFFF",
        "marker": "#2563EB",
        "text": "#111827",
        "muted": "#4B5563",
        "border": "#C8D5E3",
    },
}


def default_png_name(source_label: str = "schedule") -> str:
    safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in source_label)[:48]
    return f"{safe or 'schedule'}_{datetime.now().strftime('%Y-%m-%d_%H%M')}.png"


def _load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    candidatos = (
        ["segoeuib.ttf", "arialbd.ttf", "DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf"]
        if bold
        else ["segoeui.ttf", "arial.ttf", "DejaVuSans.ttf", "LiberationSans-Regular.ttf"]
    )
    for nome in candidatos:
        try:
            return ImageFont.truetype(nome, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def badge_color(category: str) -> str:
    """Cor estável por categoria de matéria."""
    md5 = hashlib.md5(category.encode("utf-8")).hexdigest()
    rgb = [int(md5[i : i + 2], 16) for i in (0, 2, 4)]
    rgb = [min(200, max(60, v)) for v in rgb]
    return f"#{rgb[0]:02X}{rgb[1]:02X}{rgb[2]:02X}"


def export_schedule_png(
    records: list[ClassRecord],
    output_path: str | Path,
    *,
    title: str = "Class Schedule",
    subtitle: str | None = None,
    theme: str = "dark",
    width: int = 1200,
) -> Path:
    """Exporta a lista de cards para PNG a partir do modelo (sem screenshot)."""
    colors = PNG_THEME.get(theme, PNG_THEME["dark"])
    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    margin = 40
    top_h = 130
    card_h = 150
    gap = 16
    height = margin + top_h + max(1, len(records)) * (card_h + gap) + margin

    img = Image.new("RGB", (width, height), colors["bg"])
    draw = ImageDraw.Draw(img)

    ft_title = _load_font(40, bold=True)
    ft_sub = _load_font(20)
    ft_marker = _load_font(44, bold=True)
    ft_name = _load_font(28, bold=True)
    ft_label = _load_font(18, bold=True)
    ft_value = _load_font(18)
    ft_badge = _load_font(16, bold=True)

    draw.rounded_rectangle((margin, margin, width - margin, margin + 70), radius=16, fill=colors["surface"])
    draw.text((margin + 18, margin + 12), title, fill=colors["text"], font=ft_title)
    sub = subtitle or datetime.now().strftime("Gerado em %Y-%m-%d %H:%M")
    draw.text((margin + 20, margin + 80), sub, fill=colors["muted"], font=ft_sub)

    if not records:
        draw.text((margin, margin + top_h), "No classes loaded.", fill=colors["muted"], font=ft_value)

    y = margin + top_h
    for record in records:
        x1, x2 = margin, width - margin
        draw.rounded_rectangle((x1, y, x2, y + card_h), radius=14, fill=colors["surface"], outline=colors["border"])

        marker = (x1 + 16, y + 16, x1 + 16 + 110, y + card_h - 16)
        draw.rounded_rectangle(marker, radius=12, fill=colors["marker"])
        period_txt = format_period(record.period)
        bbox = draw.textbbox((0, 0), period_txt, font=ft_marker)
        draw.text(
            (
                (marker[0] + marker[2] - (bbox[2] - bbox[0])) / 2,
                (marker[1] + marker[3] - (bbox[3] - bbox[1])) / 2 - bbox[1],
            ),
            period_txt,
            fill="#FFFFFF",
            font=ft_marker,
        )

        cx = marker[2] + 24
        draw.text((cx, y + 16), record.class_name, fill=colors["text"], font=ft_name)
        draw.text((cx, y + 60), "Teacher", fill=colors["muted"], font=ft_label)
        draw.text((cx + 100, y + 60), record.teacher, fill=colors["text"], font=ft_value)
        draw.text((cx, y + 88), "Room", fill=colors["muted"], font=ft_label)
        draw.text((cx + 100, y + 88), record.room_number, fill=colors["text"], font=ft_value)

        bbox = draw.textbbox((0, 0), record.subject_area, font=ft_badge)
        bw = bbox[2] - bbox[0] + 24
        bx2 = x2 - 20
        draw.rounded_rectangle(
            (bx2 - bw, y + 18, bx2, y + 50),
            radius=14,
            fill=badge_color(record.style_category),
        )
        draw.text((bx2 - bw + 12, y + 24), record.subject_area, fill="#FFFFFF", font=ft_badge)
        y += card_h + gap

    img.save(out_path, format="PNG")
    return out_path
