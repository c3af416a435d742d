"""Static airline code tables used by callsign handling."""

from __future__ import annotations

# ICAO airline prefix -> IATA airline designator
ICAO_TO_IATA_AIRLINE: dict[str, str] = {
    "AAL": "AA",  # American Airlines
    "ACA": "AC",  # Air Canada
    "AFR": "AF",  # Air France
    "ANA": "NH",  # All Nippon Airways
    "ASA": "AS",  # Alaska Airlines
    "BAW": "BA",  # British Airways
    "CPA": "CX",  # Cathay Pacific
    "DAL": "DL",  # Delta Air Lines
    "DLH": "LH",  # Lufthansa
    "EIN": "EI",  # Aer Lingus
    "ENY": "MQ",  # Envoy
    "FDX": "FX",  # FedEx
    "FFT": "F9",  # Frontier
    "IBE": "IB",  # Iberia
    "ICE": "FI",  # Icelandair
    "JAL": "JL",  # Japan Airlines
    "JBU": "B6",  # JetBlue
    "JZA": "QK",  # Jazz Aviation
    "KLM": "KL",  # KLM
    "NKS": "NK",  # Spirit
    "POE": "PD",  # Porter Airlines
    "QFA": "QF",  # Qantas
    "QTR": "QR",  # Qatar Airways
    "ROU": "RV",  # Air Canada Rouge
    "RPA": "YX",  # Republic
    "SIA": "SQ",  # Singapore Airlines
    "SKW": "OO",  # SkyWest
    "SWA": "WN",  # Southwest
    "SWR": "LX",  # Swiss
    "TSC": "TS",  # Air Transat
    "UAE": "EK",  # Emirates
    "UAL": "UA",  # United
    "UPS": "5X",  # UPS
    "VIR": "VS",  # Virgin Atlantic
    "WEN": "WR",  # WestJet Encore
    "WJA": "WS",  # WestJet
}

# ICAO airline prefix -> operator display name
AIRLINE_BY_ICAO_PREFIX: dict[str, str] = {
    "ACA": "Air Canada",
    "JZA": "Jazz Aviation",
    "ROU": "Air Canada Rouge",
    "WJA": "WestJet",
    "WEN": "WestJet Encore",
    "TSC": "Air Transat",
    "POE": "Porter Airlines",
    "QTR": "Qatar Airways",
    "BAW": "British Airways",
    "AFR": "Air France",
    "DLH": "Lufthansa",
    "KLM": "KLM Royal Dutch Airlines",
    "UAL": "United Airlines",
    "AAL": "American Airlines",
    "DAL": "Delta Air Lines",
    "JBU": "JetBlue",
    "SWA": "Southwest Airlines",
}


__all__ = ["AIRLINE_BY_ICAO_PREFIX", "ICAO_TO_IATA_AIRLINE"]
