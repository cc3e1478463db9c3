# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Jinja2 layouts for status-update emails.

Templates ending in ``.html`` are autoescaped; ``.txt`` templates are not.
Every section is driven by a context flag the renderer fills in from the
recipient's template policy, so a hidden section never reaches the output.
"""

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

TEXT_LAYOUT = "status_update.txt"
HTML_LAYOUT = "status_update.html"

_TEXT = """\
Hello {{ greeting_name }},

{{ status_message }}

Complaint Details:
- ID: {{ display_id }}
- Type: {{ complaint_type }}
- Status: {{ status }}
- Priority: {{ priority }}
- Area: {{ area }}
- Submitted: {{ submitted }}
{% if previous_status %}
- Previous Status: {{ previous_status }}
{% endif %}
{% if remarks %}

Remarks: {{ remarks }}
{% endif %}
{% if assignment %}

{% for label, name in assignment %}
{{ label }}: {{ name }}
{% endfor %}
{% endif %}
{% if contact %}

Citizen Contact:
{% for label, value in contact %}
- {{ label }}: {{ value }}
{% endfor %}
{% endif %}
{% if activity %}

Recent Activity:
{% for entry in activity %}
- {{ entry }}
{% endfor %}
{% endif %}
{% if attachments %}

Attachments:
{% for name in attachments %}
- {{ name }}
{% endfor %}
{% endif %}

Thank you for using {{ app_name }}.
{% if support_email %}
For support, contact {{ support_email }}.
{% endif %}
This is an automated message. Please do not reply to this email.
"""

_HTML = """\
{% macro table(rows) -%}
<table role="presentation" style="margin-top:15px;">
{%- for label, value in rows %}<tr><td style="font-size:12px;color:#6b7280;text-transform:uppercase;font-weight:600;padding:4px 12px 4px 0;">{{ label }}</td><td style="font-size:14px;color:#1f2937;">{{ value }}</td></tr>{% endfor -%}
</table>
{%- endmacro %}
<!DOCTYPE html>
<html lang="{{ language }}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Complaint Status Update - {{ app_name }}</title>
</head>
<body style="font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,sans-serif;background-color:#f8f9fa;color:#333;line-height:1.6;">
<div style="max-width:600px;margin:0 auto;padding:20px;">
<div style="background-color:#fff;padding:30px;border-radius:8px;">
<div style="text-align:center;">
{% if logo_url %}
<img src="{{ logo_url }}" alt="{{ app_name }}" style="max-height:48px;margin-bottom:10px;"><br>
{% endif %}
<h1 style="color:#667eea;margin:0;">{{ app_name }}</h1>
<p style="color:#6b7280;">Complaint Status Update</p>
</div>
<div style="background-color:#f0f9ff;padding:20px;border-radius:6px;">
<h2 style="color:#1e40af;font-size:20px;">Hello {{ greeting_name }},</h2>
<p>{{ status_message }}</p>
</div>
<div style="text-align:center;margin:30px 0;">
<div style="background-color:{{ status_color }};color:#fff;font-weight:bold;padding:15px 25px;border-radius:8px;display:inline-block;">{{ status }}</div>
<p style="color:#6b7280;font-size:14px;">Complaint {{ display_id }} status updated</p>
</div>
<div style="background-color:#f9fafb;border:1px solid #e5e7eb;border-radius:8px;padding:20px;">
<div style="font-size:18px;font-weight:700;">Complaint Details: {{ display_id }}</div>
{% set badge %}<span style="background-color:{{ priority_color }};color:#fff;padding:3px 8px;border-radius:12px;font-size:11px;">{{ priority }}</span>{% endset %}
{% set details = [("Type", complaint_type), ("Priority", badge), ("Area", area), ("Submitted", submitted)] %}
{% if ward_name %}{% set details = details + [("Ward", ward_name)] %}{% endif %}
{% if sub_zone_name %}{% set details = details + [("Sub-Zone", sub_zone_name)] %}{% endif %}
{% if previous_status %}{% set details = details + [("Previous Status", previous_status)] %}{% endif %}
{{ table(details) }}
{% if remarks %}
<div style="background-color:#fef3c7;border-radius:6px;padding:15px;margin:20px 0;">
<div style="font-weight:600;color:#92400e;">Remarks</div>
<div style="color:#92400e;">{{ remarks }}</div>
</div>
{% endif %}
{% if assignment %}
<h3 style="font-size:16px;color:#1f2937;">Assignment Details</h3>
{{ table(assignment) }}
{% endif %}
{% if contact %}
<h3 style="font-size:16px;color:#1f2937;">Citizen Contact</h3>
{{ table(contact) }}
{% endif %}
{% if activity %}
<h3 style="font-size:16px;color:#1f2937;">Recent Activity</h3>
<ul style="font-size:13px;color:#4b5563;padding-left:18px;">
{% for entry in activity %}
<li>{{ entry }}</li>
{% endfor %}
</ul>
{% endif %}
{% if attachments %}
<h3 style="font-size:16px;color:#1f2937;">Attachments</h3>
<ul style="font-size:13px;color:#4b5563;padding-left:18px;">
{% for name in attachments %}
<li>{{ name }}</li>
{% endfor %}
</ul>
{% endif %}
{% if show_tracking_tip %}
<div style="background-color:#f0fff4;border:1px solid #9ae6b4;border-radius:6px;padding:15px;margin:20px 0;"><p style="color:#22543d;font-size:14px;margin:0;"><strong>Track Your Complaint:</strong> You can always check the latest status of your complaint from your citizen dashboard or the public tracking page.</p></div>
{% endif %}
</div>
<div style="border-top:1px solid #e5e7eb;padding-top:20px;margin-top:30px;text-align:center;color:#6b7280;font-size:12px;">
<div style="font-weight:600;color:#667eea;">{{ app_name }}</div>
<p>This is an automated message from {{ org_name }}.</p>
<p>Please do not reply to this email.</p>
{% if support_email %}
<p>For support, contact <a href="mailto:{{ support_email }}" style="color:#667eea;">{{ support_email }}</a></p>
{% endif %}
{% if website_url %}
<p><a href="{{ website_url }}" style="color:#667eea;">{{ website_url }}</a></p>
{% endif %}
</div>
</div>
</div>
</body>
</html>
"""

LAYOUTS = {
    TEXT_LAYOUT: _TEXT,
    HTML_LAYOUT: _HTML,
}


def build_environment() -> Environment:
    return Environment(
        loader=DictLoader(LAYOUTS),
        autoescape=select_autoescape(enabled_extensions=("html", "xml"), default=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
