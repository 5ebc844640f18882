"""
Input validation utilities.
Validators raise ValueError so they can be used inside pydantic field validators.
"""

import re
import urllib.parse
from typing import List, Optional

import bleach

# Security configurations
ALLOWED_HTML_TAGS = ['p', 'br', 'strong', 'em', 'u', 'ol', 'ul', 'li', 'code', 'pre', 'a']
ALLOWED_HTML_ATTRIBUTES = {'a': ['href', 'title']}
ALLOWED_HTML_PROTOCOLS = ['http', 'https', 'mailto']

# Regex patterns for common validation
PATTERNS = {
    'xss_basic': re.compile(r'<[^>]*script[^>]*>|javascript:|vbscript:|onload|onerror|eval\(', re.IGNORECASE),
    'path_traversal': re.compile(r'\.\./|\.\.\\', re.IGNORECASE),
    'email': re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'),
    'url': re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE),
    'hex_color': re.compile(r'^#[0-9A-Fa-f]{6}$'),
    'user_name': re.compile(r'^[a-zA-Z0-9_]+$'),
    'safe_filename': re.compile(r'^[^\\/\x00-\x1f]+$'),
}


class SecurityValidator:
    """Security-focused validators for user supplied text."""

    @staticmethod
    def check_xss(value: str) -> str:
        """Check for potential XSS patterns."""
        if not isinstance(value, str):
            return value

        if PATTERNS['xss_basic'].search(value):
            raise ValueError("Potentially unsafe script content detected")
        return value

    @staticmethod
    def sanitize_html(value: str, allowed_tags: Optional[List[str]] = None) -> str:
        """Sanitize HTML content, removing dangerous tags and attributes."""
        if not isinstance(value, str):
            return value

        if allowed_tags is None:
            allowed_tags = ALLOWED_HTML_TAGS

        return bleach.clean(
            value,
            tags=allowed_tags,
            attributes=ALLOWED_HTML_ATTRIBUTES,
            protocols=ALLOWED_HTML_PROTOCOLS,
            strip=True
        )

    @staticmethod
    def sanitize_filename(value: str) -> str:
        """Sanitize filename to prevent path traversal and other attacks."""
        if not isinstance(value, str):
            return value

        value = value.replace('../', '').replace('..\\', '')
        value = re.sub(r'[<>:"|?*]', '', value).strip()

        if not value or not PATTERNS['safe_filename'].match(value):
            raise ValueError("Invalid filename format")

        return value


class DataValidator:
    """Validators for common data formats."""

    @staticmethod
    def validate_email(email: str) -> str:
        """Validate email format and normalize it to lower case."""
        if not isinstance(email, str):
            raise ValueError("Email must be a string")

        email = email.strip().lower()

        if not PATTERNS['email'].match(email):
            raise ValueError("Invalid email format")

        if any(char in email for char in ['<', '>', '"', '\'']):
            raise ValueError("Email contains invalid characters")

        return email

    @staticmethod
    def validate_url(url: str) -> str:
        """Validate an absolute http(s) URL."""
        if not isinstance(url, str):
            raise ValueError("URL must be a string")

        url = url.strip()

        if not PATTERNS['url'].match(url):
            raise ValueError("Invalid URL format")

        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in ['http', 'https'] or not parsed.netloc:
            raise ValueError("URL must use HTTP or HTTPS protocol")

        return url

    @staticmethod
    def validate_hex_color(color: str) -> str:
        """Validate a #RRGGBB color."""
        if not isinstance(color, str):
            raise ValueError("Color must be a string")

        color = color.strip()
        if not PATTERNS['hex_color'].match(color):
            raise ValueError("Color must be a valid hex color (e.g. #4f46e5)")

        return color.lower()


class BoardValidator:
    """Validators for board content."""

    @staticmethod
    def validate_user_name(user_name: str) -> str:
        if not isinstance(user_name, str):
            raise ValueError("User name must be a string")

        user_name = user_name.strip()
        if len(user_name) < 3 or len(user_name) > 50:
            raise ValueError("User name must be between 3 and 50 characters")
        if not PATTERNS['user_name'].match(user_name):
            raise ValueError("User name can only contain letters, numbers and underscores")

        return user_name

    @staticmethod
    def validate_title(title: str, max_length: int = 100) -> str:
        """Required, trimmed, script-free title."""
        if not isinstance(title, str):
            raise ValueError("Title must be a string")

        title = title.strip()
        if not title:
            raise ValueError("Title is required")
        if len(title) > max_length:
            raise ValueError(f"Title is too long (max {max_length} characters)")

        SecurityValidator.check_xss(title)
        return title

    @staticmethod
    def validate_ordered_ids(ids: List[str]) -> List[str]:
        """Trim ids and reject blanks; duplicates are left for the domain to report."""
        if ids is None:
            raise ValueError("Ordered ids are required")
        cleaned = []
        for value in ids:
            if not isinstance(value, str) or not value.strip():
                raise ValueError("Ordered ids cannot contain blank ids")
            cleaned.append(value.strip())
        return cleaned
