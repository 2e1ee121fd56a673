"""
Fixed code tables used to build identifiers, and the functions that resolve
free-text input (roles, states, sports) to those codes.
"""
import logging
import re

from .exceptions import InvalidCategory, MissingRegion

logger = logging.getLogger(__name__)


# User identifier categories -> single character prefix
CATEGORY_CODES = {
    'STUDENT': 'a',
    'COACH': 'c',
    'INSTITUTE': 'i',
    'CLUB': 'b',
    'EVENT_INCHARGE': 'e',
}

# Identifier classes that are not users use multi-character prefixes
EVENT_PREFIX = 'EVT'
CERTIFICATE_PREFIX = 'STAIRS-CERT'
ORDER_PREFIX = 'EVT-ORDR'

IDENTIFIER_PREFIXES = {
    'EVENT': EVENT_PREFIX,
    'CERTIFICATE': CERTIFICATE_PREFIX,
    'ORDER': ORDER_PREFIX,
}

# Reserved sport code when no sport is given
OTHER_SPORT_CODE = 'OT'

STATE_CODES = {
    'Andhra Pradesh': 'AP',
    'Arunachal Pradesh': 'AR',
    'Assam': 'AS',
    'Bihar': 'BR',
    'Chhattisgarh': 'CG',
    'Goa': 'GA',
    'Gujarat': 'GJ',
    'Haryana': 'HR',
    'Himachal Pradesh': 'HP',
    'Jharkhand': 'JH',
    'Karnataka': 'KA',
    'Kerala': 'KL',
    'Madhya Pradesh': 'MP',
    'Maharashtra': 'MH',
    'Manipur': 'MN',
    'Meghalaya': 'ML',
    'Mizoram': 'MZ',
    'Nagaland': 'NL',
    'Odisha': 'OD',
    'Punjab': 'PB',
    'Rajasthan': 'RJ',
    'Sikkim': 'SK',
    'Tamil Nadu': 'TN',
    'Telangana': 'TG',
    'Tripura': 'TR',
    'Uttar Pradesh': 'UP',
    'Uttarakhand': 'UK',
    'West Bengal': 'WB',
    'Andaman and Nicobar Islands': 'AN',
    'Chandigarh': 'CH',
    'Dadra and Nagar Haveli and Daman and Diu': 'DD',
    'Delhi': 'DL',
    'Jammu and Kashmir': 'JK',
    'Ladakh': 'LA',
    'Lakshadweep': 'LD',
    'Puducherry': 'PY',
}

# Event venues are often entered as a city; map the common ones to their state
CITY_STATE_CODES = {
    'New Delhi': 'DL',
    'Mumbai': 'MH',
    'Pune': 'MH',
    'Nagpur': 'MH',
    'Nashik': 'MH',
    'Aurangabad': 'MH',
    'Bangalore': 'KA',
    'Bengaluru': 'KA',
    'Mysore': 'KA',
    'Mysuru': 'KA',
    'Hubli': 'KA',
    'Hyderabad': 'TG',
    'Warangal': 'TG',
    'Chennai': 'TN',
    'Coimbatore': 'TN',
    'Madurai': 'TN',
    'Tiruchirappalli': 'TN',
    'Salem': 'TN',
    'Kolkata': 'WB',
    'Howrah': 'WB',
    'Ahmedabad': 'GJ',
    'Vadodara': 'GJ',
    'Rajkot': 'GJ',
    'Jaipur': 'RJ',
    'Jodhpur': 'RJ',
    'Kota': 'RJ',
    'Lucknow': 'UP',
    'Kanpur': 'UP',
    'Ghaziabad': 'UP',
    'Agra': 'UP',
    'Meerut': 'UP',
    'Varanasi': 'UP',
    'Allahabad': 'UP',
    'Bareilly': 'UP',
    'Moradabad': 'UP',
    'Aligarh': 'UP',
    'Indore': 'MP',
    'Bhopal': 'MP',
    'Jabalpur': 'MP',
    'Gwalior': 'MP',
    'Patna': 'BR',
    'Ludhiana': 'PB',
    'Amritsar': 'PB',
    'Jalandhar': 'PB',
    'Faridabad': 'HR',
    'Gurgaon': 'HR',
    'Gurugram': 'HR',
    'Srinagar': 'JK',
    'Dhanbad': 'JH',
    'Ranchi': 'JH',
    'Vijayawada': 'AP',
    'Raipur': 'CG',
    'Guwahati': 'AS',
    'Bhubaneswar': 'OD',
    'Thiruvananthapuram': 'KL',
    'Trivandrum': 'KL',
    'Kochi': 'KL',
    'Cochin': 'KL',
}

SPORT_CODES = {
    'Football': 'FB',
    'Soccer': 'FB',
    'Cricket': 'CR',
    'Basketball': 'BB',
    'Basketball 3x3': 'BB',
    'Volleyball': 'VB',
    'Beach Volleyball': 'BV',
    'Badminton': 'BD',
    'Tennis': 'TN',
    'Tennis Cricket': 'TC',
    'Table Tennis': 'TT',
    'Hockey': 'HK',
    'Kabaddi': 'KB',
    'Athletics': 'AT',
    'Running': 'RN',
    'Marathon': 'MR',
    'Swimming (Artistic, Marathon, Regular)': 'SW',
    'Swimming': 'SW',
    'Chess': 'CH',
    'Boxing': 'BX',
    'Kick Boxing': 'KX',
    'Wrestling': 'WR',
    'Archery': 'AR',
    'Shooting': 'SH',
    'Gymnastics (Rhythmic, Artistic, trampoline)': 'GM',
    'Gymnastics': 'GM',
    'Cycling Track': 'CY',
    'Cycling': 'CY',
    'Road Cycling': 'RC',
    'Mountain Biking': 'MB',
    'Bmx Freestyle, Racing': 'BM',
    'Weightlifting': 'WL',
    'Judo': 'JD',
    'Karate': 'KR',
    'Taekwondo': 'TK',
    'Atya Patya': 'AP',
    'Kho Kho': 'KK',
    'Silambam': 'SL',
    'Wushu': 'WS',
    'Yogasana': 'YG',
    'Throwball': 'TB',
    'Tug Of War': 'TW',
    'Jump Rope': 'JR',
    'Skating': 'SK',
    'Skateboarding': 'SB',
    'Sport Climbing': 'SC',
    'Surfing': 'SF',
    'Diving': 'DV',
    'Rowing': 'RW',
    'Sailing': 'SA',
    'Water Polo': 'WP',
    'Canoe Slalom, Sprint': 'CS',
    'Handball': 'HB',
    'Rugby': 'RG',
    'Golf': 'GF',
    'Breaking': 'BR',
    'Modern Pentathlon': 'MP',
    'Triathlon': 'TR',
    'Dance Sports': 'DS',
    'Cultural Activities': 'CA',
    'Physical Education & Sports Sciences': 'PE',
    'Other': OTHER_SPORT_CODE,
}


def _normalize(name):
    return ' '.join(str(name).split()).casefold()


# Lookups are case-insensitive and whitespace-insensitive
_REGION_LOOKUP = {_normalize(k): v for k, v in {**CITY_STATE_CODES, **STATE_CODES}.items()}
_SPORT_LOOKUP = {_normalize(k): v for k, v in SPORT_CODES.items()}
_CATEGORY_LOOKUP = {**CATEGORY_CODES, 'EVENT': EVENT_PREFIX}

_NON_LETTERS = re.compile(r'[^A-Z]')


def derive_code(name):
    """
    Fallback code for a name missing from the tables: the first two ASCII
    letters of the name, upper-cased. Padded with 'X' so the result is always
    exactly two letters, whatever symbols the input contains.
    """
    letters = _NON_LETTERS.sub('', _normalize(name).upper())
    return (letters[:2]).ljust(2, 'X')


def resolve_category(category):
    """
    Return the prefix for a role or identifier class
    (STUDENT -> 'a', EVENT -> 'EVT'). Unknown categories raise InvalidCategory.
    """
    if not isinstance(category, str):
        raise InvalidCategory(category)
    code = _CATEGORY_LOOKUP.get(category.strip().upper())
    if code is None:
        raise InvalidCategory(category)
    return code


def category_for_code(code):
    """Reverse of resolve_category for user categories ('a' -> 'STUDENT')."""
    for category, category_code in CATEGORY_CODES.items():
        if category_code == code:
            return category
    return None


def resolve_region(name):
    """
    Two-letter state code for a state or city name.
    Unknown names fall back to derive_code() rather than failing.
    """
    if name is None or not str(name).strip():
        raise MissingRegion()
    code = _REGION_LOOKUP.get(_normalize(name))
    if code:
        return code
    code = derive_code(name)
    logger.warning(f"Unknown region {name!r}, using derived code {code}")
    return code


def resolve_sport(name):
    """Two-letter sport code. Missing sport resolves to 'OT'."""
    if name is None or not str(name).strip():
        return OTHER_SPORT_CODE
    code = _SPORT_LOOKUP.get(_normalize(name))
    if code:
        return code
    code = derive_code(name)
    logger.warning(f"Unknown sport {name!r}, using derived code {code}")
    return code
