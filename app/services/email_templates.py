"""
Welcome email template for new waitlist signups.
"""

from html import escape


def render_welcome_email(name: str, waitlist_position: int, referral_code: str, referral_link: str) -> str:
    """Render the welcome email HTML. User-supplied values are escaped."""
    display_name = escape(name.strip() or "there")
    position = f"{waitlist_position:,}"
    code = escape(referral_code)
    link = escape(referral_link, quote=True)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Welcome to Kolplay</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;">
  <div style="background-color: #000000; min-height: 100vh; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background: linear-gradient(135deg, rgba(124, 58, 237, 0.1), rgba(20, 184, 166, 0.1)); border-radius: 24px; padding: 40px; border: 1px solid #1f2937;">

      <div style="text-align: center; margin-bottom: 40px;">
        <h1 style="color: #ffffff; font-size: 32px; font-weight: bold; margin: 0 0 16px 0;">Hi {display_name}! 👋</h1>
      </div>

      <div style="background: rgba(31, 41, 55, 0.5); border-radius: 16px; padding: 24px; margin-bottom: 32px; border: 1px solid #374151;">
        <p style="color: #d1d5db; font-size: 16px; line-height: 1.6; margin: 0;">
          Thank you for joining our early access waitlist! You're now part of an exclusive group getting first access to AI-powered KOL predictions.
        </p>
      </div>

      <div style="text-align: center; margin-bottom: 32px;">
        <div style="background: linear-gradient(135deg, #7c3aed, #14b8a6); border-radius: 16px; padding: 24px; display: inline-block; min-width: 200px;">
          <div style="color: #ffffff; font-size: 18px; font-weight: 600; margin-bottom: 8px; opacity: 0.9;">Your Position</div>
          <div style="color: #ffffff; font-size: 36px; font-weight: bold; margin: 0;">#{position}</div>
        </div>
      </div>

      <div style="background: rgba(31, 41, 55, 0.3); border-radius: 16px; padding: 24px; margin-bottom: 32px; border: 1px solid #374151;">
        <p style="color: #ffffff; font-size: 18px; font-weight: 600; margin: 0 0 12px 0;">You're in the queue!</p>
        <p style="color: #d1d5db; font-size: 14px; line-height: 1.5; margin: 0;">
          We'll review your application and let you know if you made it to our alpha program. Keep an eye on your inbox!
        </p>
      </div>

      <div style="background: rgba(31, 41, 55, 0.3); border-radius: 16px; padding: 24px; margin-bottom: 32px; border: 1px solid #374151;">
        <p style="color: #ffffff; font-size: 18px; font-weight: 600; margin: 0 0 16px 0;">Boost Your Position</p>
        <p style="color: #d1d5db; font-size: 14px; line-height: 1.5; margin-bottom: 20px;">
          Share your referral code and move up in the queue for each friend who joins!
        </p>

        <div style="background: #374151; border-radius: 12px; padding: 16px; text-align: center; margin-bottom: 12px;">
          <div style="color: #a855f7; font-family: 'Courier New', monospace; font-size: 24px; font-weight: bold; letter-spacing: 2px;">{code}</div>
        </div>

        <p style="color: #ffffff; font-size: 14px; font-weight: 600; margin-bottom: 8px;">Share this link:</p>
        <div style="background: #374151; border-radius: 12px; padding: 16px; word-break: break-all;">
          <a href="{link}" style="color: #14b8a6; text-decoration: none; font-size: 14px;">{link}</a>
        </div>

        <div style="text-align: center; margin-top: 24px;">
          <a href="{link}" style="display: inline-block; background: linear-gradient(135deg, #7c3aed, #14b8a6); color: #ffffff; text-decoration: none; padding: 12px 32px; border-radius: 12px; font-weight: 600; font-size: 16px;">Share Your Link</a>
        </div>
      </div>

      <div style="text-align: center; padding-top: 32px; border-top: 1px solid #374151;">
        <p style="color: #9ca3af; font-size: 14px; margin: 0;">
          Best regards,<br>
          <span style="color: #ffffff; font-weight: 600;">The Kolplay Team</span>
        </p>
        <p style="color: #a855f7; font-weight: bold; font-size: 18px; margin-top: 16px;">Play with the 1%</p>
      </div>

    </div>
  </div>
</body>
</html>
"""
