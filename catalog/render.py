"""
Render decision logic for the receipt detail page.

build_blocks() is a pure function from controller state to an ordered list of
display blocks, so the decision tree can be tested without any network or UI
runtime. Priority order:

1. loading -> a single "loading" block
2. error (missing slug, not found, lookup failed) -> a single "error" block
3. receipt -> one block per field group; a block whose backing field is
   null/absent/empty is omitted, except prep time, calories and perfect-for,
   which render the placeholder text instead
4. otherwise, if a slug was supplied -> a single "empty" block

render_html() and render_page() turn the blocks into an HTML fragment or a
full document. The Streamlit page renders the same blocks with Streamlit
elements instead.
"""

import html
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from catalog.controller import DetailState
from catalog.i18n import get_labels
from catalog.models import NutritionalInfo, Receipt

BLOCK_LOADING = "loading"
BLOCK_ERROR = "error"
BLOCK_EMPTY = "empty"
BLOCK_HEADER = "header"
BLOCK_IMAGE = "image"
BLOCK_META = "meta"
BLOCK_INGREDIENTS = "ingredients"
BLOCK_BENEFITS = "benefits"
BLOCK_PREPARATION = "preparation"
BLOCK_NUTRITION = "nutrition"
BLOCK_QUOTE = "quote"
BLOCK_TAGS = "tags"

DEFAULT_TAG_STYLE = "default"


@dataclass(frozen=True)
class DisplayItem:
    """One line of a list block. style is only set for tags."""
    text: str
    style: Optional[str] = None


@dataclass(frozen=True)
class DisplayBlock:
    """
    One presentational block.

    Attributes:
        kind: Block kind (one of the BLOCK_* constants)
        heading: Section heading, if the block has one
        text: Main text (title, message, preparation text, quote, image alt)
        items: Ordered list entries
        url: Image URL (image blocks only)
    """
    kind: str
    heading: Optional[str] = None
    text: Optional[str] = None
    items: Tuple[DisplayItem, ...] = ()
    url: Optional[str] = None


def format_amount(value: Optional[float]) -> Optional[str]:
    """Format a measurement without trailing zeros (180.0 -> "180", 6.50 -> "6.5")."""
    if value is None:
        return None
    return ("%.2f" % value).rstrip("0").rstrip(".")


def _nutrition_items(info: NutritionalInfo, labels: Dict[str, str]) -> Tuple[DisplayItem, ...]:
    placeholder = labels["placeholder"]
    rows = [
        (labels["calories"], info.calories_kcal, "kcal"),
        (labels["protein"], info.protein_g, "g"),
        (labels["carbohydrates"], info.carbohydrates_g, "g"),
        (labels["fats"], info.fats_g, "g"),
        (labels["fiber"], info.fiber_g, "g"),
        (labels["sugars"], info.sugars_g, "g"),
        (labels["sodium"], info.sodium_mg, "mg"),
    ]
    items = []
    for label, value, unit in rows:
        amount = format_amount(value)
        items.append(DisplayItem(f"{label}: {amount} {unit}" if amount is not None else f"{label}: {placeholder}"))
    return tuple(items)


def receipt_blocks(receipt: Receipt, labels: Dict[str, str]) -> List[DisplayBlock]:
    """
    Build the field-by-field blocks for a loaded receipt.

    Args:
        receipt: The loaded receipt
        labels: Label table from catalog.i18n.get_labels()

    Returns:
        Ordered list of blocks, omitting empty optional sections
    """
    placeholder = labels["placeholder"]
    blocks: List[DisplayBlock] = [
        DisplayBlock(kind=BLOCK_HEADER, heading=receipt.category, text=receipt.title),
    ]

    if receipt.image_url:
        blocks.append(DisplayBlock(
            kind=BLOCK_IMAGE,
            url=receipt.image_url,
            text=receipt.image_alt_text or receipt.title,
        ))

    blocks.append(DisplayBlock(kind=BLOCK_META, items=(
        DisplayItem(f"{labels['perfect_for']}: {receipt.perfect_for or placeholder}"),
        DisplayItem(f"{labels['prep_time']}: {receipt.prep_time or placeholder}"),
        DisplayItem(f"{labels['calories']}: {receipt.calories or placeholder}"),
    )))

    if receipt.ingredients:
        blocks.append(DisplayBlock(
            kind=BLOCK_INGREDIENTS,
            heading=labels["ingredients"],
            items=tuple(DisplayItem(ingredient.display_text) for ingredient in receipt.ingredients),
        ))

    if receipt.benefits:
        blocks.append(DisplayBlock(
            kind=BLOCK_BENEFITS,
            heading=labels["benefits"],
            items=tuple(DisplayItem(benefit.display_text) for benefit in receipt.benefits),
        ))

    if receipt.how_to_prepare:
        blocks.append(DisplayBlock(kind=BLOCK_PREPARATION, heading=labels["how_to_prepare"], text=receipt.how_to_prepare))

    if receipt.nutritional_info is not None:
        blocks.append(DisplayBlock(
            kind=BLOCK_NUTRITION,
            heading=labels["nutrition"],
            items=_nutrition_items(receipt.nutritional_info, labels),
        ))

    if receipt.quote:
        blocks.append(DisplayBlock(kind=BLOCK_QUOTE, text=receipt.quote))

    if receipt.tags:
        blocks.append(DisplayBlock(
            kind=BLOCK_TAGS,
            heading=labels["tags"],
            items=tuple(DisplayItem(tag.text, tag.style or DEFAULT_TAG_STYLE) for tag in receipt.tags),
        ))

    return blocks


def build_blocks(state: DetailState, labels: Optional[Dict[str, str]] = None) -> List[DisplayBlock]:
    """
    Decide what the page shows for a controller state.

    Args:
        state: Controller state snapshot
        labels: Label table (optional, defaults to the state's language)

    Returns:
        Ordered list of display blocks (empty when there is nothing to show)
    """
    labels = labels or get_labels(state.language)

    if state.loading:
        return [DisplayBlock(kind=BLOCK_LOADING, text=labels["loading"])]

    if state.error:
        return [DisplayBlock(kind=BLOCK_ERROR, text=state.error)]

    if state.receipt is not None:
        return receipt_blocks(state.receipt, labels)

    if state.slug:
        return [DisplayBlock(
            kind=BLOCK_EMPTY,
            text=labels["no_receipt_for_slug"].format(slug=state.slug, language=state.language),
        )]

    return []


# ============================================================================
# HTML output
# ============================================================================

def _esc(value: Optional[str]) -> str:
    return html.escape(value or "", quote=True)


def _style_class(style: Optional[str]) -> str:
    cleaned = re.sub(r"[^a-z0-9-]+", "-", (style or DEFAULT_TAG_STYLE).lower()).strip("-")
    return cleaned or DEFAULT_TAG_STYLE


def _list_section(block: DisplayBlock) -> str:
    items = "".join(f"<li>{_esc(item.text)}</li>" for item in block.items)
    return (
        f'<section class="receipt-{block.kind}">'
        f"<h2>{_esc(block.heading)}</h2><ul>{items}</ul></section>"
    )


def block_to_html(block: DisplayBlock) -> str:
    """Render a single block as an HTML snippet."""
    if block.kind == BLOCK_LOADING:
        return f'<div class="receipt-loading" role="status">{_esc(block.text)}</div>'
    if block.kind == BLOCK_ERROR:
        return f'<div class="receipt-error" role="alert">{_esc(block.text)}</div>'
    if block.kind == BLOCK_EMPTY:
        return f'<p class="receipt-empty">{_esc(block.text)}</p>'
    if block.kind == BLOCK_HEADER:
        category = f'<span class="receipt-category">{_esc(block.heading)}</span>' if block.heading else ""
        return f'<header class="receipt-header">{category}<h1>{_esc(block.text)}</h1></header>'
    if block.kind == BLOCK_IMAGE:
        return f'<img class="receipt-image" src="{_esc(block.url)}" alt="{_esc(block.text)}">'
    if block.kind == BLOCK_META:
        items = "".join(f"<li>{_esc(item.text)}</li>" for item in block.items)
        return f'<ul class="receipt-meta">{items}</ul>'
    if block.kind in (BLOCK_INGREDIENTS, BLOCK_BENEFITS, BLOCK_NUTRITION):
        return _list_section(block)
    if block.kind == BLOCK_PREPARATION:
        paragraphs = "".join(
            f"<p>{_esc(line.strip())}</p>" for line in (block.text or "").splitlines() if line.strip()
        )
        return f'<section class="receipt-preparation"><h2>{_esc(block.heading)}</h2>{paragraphs}</section>'
    if block.kind == BLOCK_QUOTE:
        return f'<blockquote class="receipt-quote">{_esc(block.text)}</blockquote>'
    if block.kind == BLOCK_TAGS:
        items = "".join(
            f'<li class="tag tag-{_style_class(item.style)}">{_esc(item.text)}</li>' for item in block.items
        )
        return f'<section class="receipt-tags"><h2>{_esc(block.heading)}</h2><ul>{items}</ul></section>'
    raise ValueError(f"Unknown block kind: {block.kind}")


def render_html(blocks: List[DisplayBlock]) -> str:
    """Render blocks as an HTML fragment wrapped in a receipt container."""
    return '<div class="receipt-page">' + "".join(block_to_html(block) for block in blocks) + "</div>"


_PAGE_CSS = """
body { font-family: sans-serif; background: #f8f5f0; color: #1f2933; margin: 0; }
.site-header, .site-footer { background: #205D37; color: #fff; padding: 1rem 2rem; }
.site-footer { font-size: 0.85rem; margin-top: 3rem; }
main { max-width: 48rem; margin: 0 auto; padding: 2rem 1rem; }
.receipt-category { text-transform: uppercase; font-size: 0.8rem; color: #205D37; }
.receipt-image { max-width: 100%; border-radius: 12px; }
.receipt-meta { list-style: none; padding: 0; color: #52606d; }
.receipt-error { background: #fde8e8; color: #9b1c1c; padding: 1rem; border-radius: 8px; }
.receipt-quote { font-style: italic; border-left: 4px solid #205D37; padding-left: 1rem; }
.receipt-tags ul { list-style: none; padding: 0; }
.tag { display: inline-block; border-radius: 999px; padding: 2px 10px; margin: 0 4px 4px 0;
       font-size: 0.75rem; background: #eef2ff; }
.tag-green { background: #dcfce7; }
.tag-orange { background: #ffedd5; }
.tag-red { background: #fee2e2; }
"""


def render_page(state: DetailState, labels: Optional[Dict[str, str]] = None) -> str:
    """
    Render a full HTML document for a controller state.

    Args:
        state: Controller state snapshot
        labels: Label table (optional, defaults to the state's language)

    Returns:
        HTML document string
    """
    labels = labels or get_labels(state.language)
    blocks = build_blocks(state, labels)
    title = state.receipt.title if state.receipt is not None else labels["page_title"]
    return (
        "<!DOCTYPE html>"
        f'<html lang="{_esc(state.language)}"><head><meta charset="utf-8">'
        f"<title>{_esc(title)}</title><style>{_PAGE_CSS}</style></head><body>"
        f'<div class="site-header">{_esc(labels["page_title"])}</div>'
        f"<main>{render_html(blocks)}</main>"
        f'<footer class="site-footer">{_esc(labels["footer"])}</footer>'
        "</body></html>"
    )
