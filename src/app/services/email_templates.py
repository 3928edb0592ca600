"""
Transactional Email Templates

HTML bodies for emails sent by the auth flows. Values are HTML-escaped
before interpolation.
"""

from datetime import datetime
from html import escape


def password_reset(app_name: str, reset_url: str, expires_at: datetime) -> str:
    """Password reset email with a single call-to-action link."""
    name = escape(app_name)
    url = escape(reset_url, quote=True)
    expires = expires_at.strftime("%Y-%m-%d %H:%M:%SZ")

    return f"""<!doctype html>
<html>
  <body style="font-family:Arial,Helvetica,sans-serif; color:#1f2937; background:#ffffff; margin:0; padding:24px;">
    <div style="max-width:560px; margin:0 auto;">
      <h2 style="margin:0 0 16px 0; color:#111827;">{name} - Password reset</h2>
      <p style="line-height:1.6;">We received a request to reset your password.</p>
      <p style="line-height:1.6;">
        <a href="{url}"
           style="display:inline-block; background:#2563eb; color:#fff; padding:12px 18px; border-radius:8px; text-decoration:none;">
           Reset password
        </a>
      </p>
      <p style="line-height:1.6; font-size:14px; color:#4b5563;">
        This link expires on <strong>{expires} (UTC)</strong>.
        If you did not request this change, ignore this message.
      </p>
      <hr style="border:none; border-top:1px solid #e5e7eb; margin:24px 0;">
      <p style="font-size:12px; color:#6b7280;">{name}</p>
    </div>
  </body>
</html>"""
