from __future__ import annotations

from typing import Final, List, Mapping

# Index 0 is spreadsheet row 2 (row 1 holds the headers)
HEADER_ROW_OFFSET: Final[int] = 2

# Exact header spellings (lowercased) routed to each validation rule
EMAIL_FIELDS: Final[List[str]] = ["email", "donor_email"]
DONATION_FIELDS: Final[List[str]] = ["donation_amount", "amount", "donation"]
DATE_FIELDS: Final[List[str]] = ["date", "donation_date", "created_date"]
DONOR_ID_FIELDS: Final[List[str]] = ["donor_id", "donorid", "id"]
STATE_FIELDS: Final[List[str]] = ["state"]

# Auto-fix routes on its own, slightly wider lists
AUTOFIX_DATE_FIELDS: Final[List[str]] = [
    "date",
    "donation_date",
    "created_date",
    "updated_date",
    "birth_date",
]
AUTOFIX_CURRENCY_FIELDS: Final[List[str]] = ["donation_amount", "amount", "price", "cost"]

# Loose header variants -> canonical column names (auto-fix renaming only)
COLUMN_NAME_ALIASES: Final[Mapping[str, str]] = {
    "emailaddress": "email",
    "email address": "email",
    "e-mail": "email",
    "firstname": "first_name",
    "first name": "first_name",
    "lastname": "last_name",
    "last name": "last_name",
    "fullname": "full_name",
    "full name": "full_name",
    "phonenumber": "phone_number",
    "phone number": "phone_number",
    "phone": "phone_number",
    "donationamount": "donation_amount",
    "donation amount": "donation_amount",
    "amount": "donation_amount",
    "donationdate": "donation_date",
    "donation date": "donation_date",
    "donorid": "donor_id",
    "donor id": "donor_id",
    "id": "donor_id",
    "streetaddress": "street_address",
    "street address": "street_address",
    "address": "street_address",
    "zipcode": "zip_code",
    "zip code": "zip_code",
    "zip": "zip_code",
    "postalcode": "zip_code",
    "postal code": "zip_code",
}

# Misspelled email domains -> intended domain
EMAIL_DOMAIN_TYPOS: Final[Mapping[str, str]] = {
    "gmail.con": "gmail.com",
    "gmial.com": "gmail.com",
    "gmai.com": "gmail.com",
    "yahho.com": "yahoo.com",
    "yahooo.com": "yahoo.com",
    "yaho.com": "yahoo.com",
    "hotmai.com": "hotmail.com",
    "hotmial.com": "hotmail.com",
    "hotmail.con": "hotmail.com",
    "outlook.con": "outlook.com",
    "aol.con": "aol.com",
    "icloud.con": "icloud.com",
}

STATE_ABBREVIATIONS: Final[Mapping[str, str]] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

# Years outside this window are rejected by the auto-fix date repair
FIX_YEAR_MIN: Final[int] = 1900
FIX_YEAR_MAX: Final[int] = 2100
