"""Formatting helpers for listings -> card dictionaries."""

import html
import re

import pandas as pd

from .filters import AMENITY_FLAGS


def slugify(s: str) -> str:
    return re.sub(r"[^a-z0-9\-]", "-", s.lower()).strip("-")


def _group_indian(n: int) -> str:
    # 1234567 -> 12,34,567
    s = str(n)
    if len(s) <= 3:
        return s
    head, tail = s[:-3], s[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def price_format(val):
    if val is None or pd.isna(val):
        return "N/A"
    v = float(val)
    if v >= 1e7:
        return f"₹{v / 1e7:.2f} Cr"
    if v >= 1e5:
        return f"₹{v / 1e5:.2f} L"
    return f"₹{_group_indian(int(round(v)))}"


def _get(row, key):
    # row can be a Series or mapping
    v = row.get(key) if hasattr(row, "get") else row[key]
    try:
        if pd.isna(v):
            return None
    except (TypeError, ValueError):
        pass
    return v


def make_property_card(row, view: str = "grid") -> dict:
    bhk = _get(row, "bhk")
    location = _get(row, "location")
    title = _get(row, "title")
    pid = _get(row, "id")

    bhk_text = f"{int(bhk)} BHK" if bhk is not None else ""
    if not title:
        title = f"{bhk_text} in {str(location).title()}" if location else bhk_text
    amenities = [label for label, flag in AMENITY_FLAGS.items() if _get(row, flag)]

    if pid:
        cta = f"/property/{pid}"
    else:
        cta = f"/property/{slugify(str(title)) or 'unknown'}"
    return {
        "id": pid,
        "title": str(title).strip(),
        "location": str(location).title() if location else "",
        "bhk": int(bhk) if bhk is not None else None,
        "price": price_format(_get(row, "price")),
        "amenities": amenities,
        "image": _get(row, "image"),
        "cta": cta,
        "view": view,
    }


def results_to_cards(df: pd.DataFrame, view: str = "grid"):
    return [make_property_card(row, view=view) for _, row in df.iterrows()]


def card_html(card: dict) -> str:
    """Card markup for ``st.markdown(..., unsafe_allow_html=True)``.

    Every value is escaped; listing data is not trusted markup.
    """
    esc = html.escape
    amenities = ", ".join(card.get("amenities") or []) or "Not listed"
    image = card.get("image")
    img_html = (
        f"<img src=\"{esc(str(image), quote=True)}\" style='width:100%; border-radius:8px;'>"
        if image
        else ""
    )
    title = esc(str(card.get("title") or "N/A"))
    price = esc(str(card.get("price") or "N/A"))
    return f"""
    <div style='padding:15px; border:1px solid #ddd; border-radius:12px; margin-bottom:10px;'>
        {img_html}
        <h4>{title} – {price}</h4>
        <p><b>Location:</b> {esc(str(card.get("location") or "N/A"))}<br>
        <b>BHK:</b> {esc(str(card.get("bhk") or "N/A"))}<br>
        <b>Amenities:</b> {esc(amenities)}<br>
        <a href="{esc(str(card.get("cta") or "#"), quote=True)}" target='_blank'>View Property</a></p>
    </div>
    """
