PATTERNS = {
        'subtotal': r'^\s*(?:sub\s*-?\s*total|food\s*total|items?\s*total)\b[:\s]*\$?\s*(-?[\d,]*\.?\d+)',
        'total': r'^\s*(?:grand\s*total|total\s*due|amount\s*due|balance\s*due|balance|total)\b[:\s]*\$?\s*(-?[\d,]*\.?\d+)',
        'tax': r'^\s*(?:sales\s*tax|tax|vat|hst|gst)\b.*?\$?\s*(-?[\d,]*\.?\d+)\s*$',
        'gratuity': r'^\s*(?:auto\s*-?\s*)?(?:gratuity|service\s*charge|service\s*fee)\b.*?\$?\s*(-?[\d,]*\.?\d+)\s*$',
        'tip': r'^\s*(?:tip|additional\s*tip)\b[:\s]*\$?\s*(-?[\d,]*\.?\d+)\s*$',

        'qty_prefix': r'^\s*(\d+)\s*[x×]?\s+(.+?)\s+\$?([\d,]*\.\d{2})\s*$',
        'qty_suffix': r'^\s*(.+?)\s+[x×]\s*(\d+)\s+\$?([\d,]*\.\d{2})\s*$',
        'simple_item': r'^\s*(.+?)\s+\$?([\d,]*\.\d{2})\s*$',
    }

# Lines that are never menu items
SKIP_WORDS = [
    'total', 'subtotal', 'tax', 'tip', 'gratuity', 'change', 'cash',
    'card', 'visa', 'mastercard', 'amex', 'balance', 'amount', 'due',
    'server', 'guest', 'receipt', 'invoice', 'date',
    'time', 'cashier', 'thank', 'auth', 'approved',
]

MOBILE_USER_AGENT_PATTERN = r'iPhone|iPad|iPod|Android'
VENMO_MOBILE_BASE = 'venmo://paycharge?txn=pay'
VENMO_WEB_BASE = 'https://venmo.com/?txn=pay'

SUPPORTED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.gif', '.webp'}
UNSUPPORTED_IMAGE_EXTENSIONS = {'.heic', '.heif'}

# Persisted user settings
SETTING_BETA_FEATURES = 'beta_features_enabled'
SETTING_API_KEY = 'api_key'
SETTING_VENMO_USERNAME = 'venmo_username'
