# heymies/domain/listing_copy.py
from __future__ import annotations

import math
from dataclasses import dataclass, field


def format_zar(n: float) -> str:
    """R 1 250 000 (whole rands, space-grouped)."""
    return "R " + f"{math.floor(n + 0.5):,}".replace(",", " ")


def title_case(s: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in s.replace("_", " ").split(" ") if w)


@dataclass(frozen=True)
class ListingFacts:
    sale_type: str
    listing_type: str
    title: str
    suburb: str
    city: str
    province: str

    price: float | None = None
    deposit: float | None = None
    available_from: str | None = None

    bedrooms: int | None = None
    bathrooms: float | None = None
    garages: int | None = None
    parking: int | None = None
    floor_size_m2: int | None = None
    erf_size_m2: int | None = None

    levy: float | None = None
    rates_taxes: float | None = None

    pets_allowed: bool = False
    furnished: bool = False
    features: list[str] = field(default_factory=list)


def _num(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def build_listing_description(f: ListingFacts) -> str:
    """
    Template description used when the lister leaves the description empty.
    Paragraphs are separated by a blank line.
    """
    loc = ", ".join(x for x in (f.suburb, f.city) if x)
    lines: list[str] = []

    bed_bath = ", ".join(
        x
        for x in (
            f"{_num(f.bedrooms)} bedroom" if f.bedrooms is not None else None,
            f"{_num(f.bathrooms)} bathroom" if f.bathrooms is not None else None,
        )
        if x
    )
    headline = title_case(f.listing_type)
    if bed_bath:
        headline += f" • {bed_bath}"
    headline += f" in {loc}"
    if f.province:
        headline += f", {f.province}"
    lines.append(headline + ".")

    if f.title.strip():
        lines.append(f.title.strip())

    if f.price is not None:
        if f.sale_type == "sale":
            lines.append(f"Asking price: {format_zar(f.price)}.")
        else:
            rent_bits = [f"Rent: {format_zar(f.price)} per month"]
            if f.deposit is not None:
                rent_bits.append(f"Deposit: {format_zar(f.deposit)}")
            if f.available_from:
                rent_bits.append(f"Available: {f.available_from}")
            lines.append(" • ".join(rent_bits) + ".")

    specs: list[str] = []
    if f.garages is not None:
        specs.append(f"{f.garages} garage{'' if f.garages == 1 else 's'}")
    if f.parking is not None:
        specs.append(f"{f.parking} parking")
    if f.floor_size_m2 is not None:
        specs.append(f"{f.floor_size_m2}m² floor size")
    if f.erf_size_m2 is not None:
        specs.append(f"{f.erf_size_m2}m² erf")
    if specs:
        lines.append(f"Property features: {' • '.join(specs)}.")

    costs: list[str] = []
    if f.levy is not None:
        costs.append(f"Levy: {format_zar(f.levy)} p/m")
    if f.rates_taxes is not None:
        costs.append(f"Rates & taxes: {format_zar(f.rates_taxes)} p/m")
    if costs:
        lines.append(" • ".join(costs) + ".")

    flags: list[str] = []
    if f.furnished:
        flags.append("Furnished")
    if f.pets_allowed:
        flags.append("Pets allowed")
    if flags:
        lines.append(" • ".join(flags) + ".")

    if f.features:
        lines.append(f"Extras: {', '.join(title_case(x) for x in f.features)}.")

    return "\n\n".join(lines).strip()
