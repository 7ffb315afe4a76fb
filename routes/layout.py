from flask import render_template_string

PAGE_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }} - RLH Cleaning + SOC</title>
    <style>
        body { font-family: Arial, sans-serif; background: #f5f0eb; margin: 0; padding: 20px; color: #333; }
        .container { display: flex; justify-content: center; }
        .card { background: white; padding: 30px; border-radius: 15px; box-shadow: 0 10px 30px rgba(0,0,0,0.08); width: 100%; max-width: 480px; }
        .card.wide { max-width: 720px; }
        .header { display: flex; justify-content: space-between; align-items: center; }
        .stack { display: flex; flex-direction: column; gap: 14px; }
        label { display: flex; flex-direction: column; gap: 6px; font-weight: bold; font-size: 14px; }
        input, select { padding: 12px; border: 2px solid #e0d6cc; border-radius: 10px; font-size: 16px; }
        button, .btn { padding: 12px 18px; background: #8b6f5a; color: white; border: none; border-radius: 10px; font-size: 16px; font-weight: bold; cursor: pointer; text-decoration: none; display: inline-block; text-align: center; }
        button.ghost, .btn.ghost { background: transparent; color: #8b6f5a; border: 2px solid #8b6f5a; }
        button:disabled { opacity: 0.5; cursor: default; }
        .muted { color: #888; }
        .message { padding: 12px; border-radius: 10px; background: #fbe9e7; color: #a33; }
        .task-group h2 { margin-bottom: 4px; }
        .task-section h3 { font-size: 15px; color: #8b6f5a; margin: 10px 0 6px; }
        .task-row { flex-direction: row; align-items: center; gap: 10px; font-weight: normal; padding: 8px 0; border-bottom: 1px solid #f0e8e0; }
        .task-row.is-done span { text-decoration: line-through; color: #999; }
        .task-checkbox { width: 22px; height: 22px; }
    </style>
</head>
<body>
{{ body|safe }}
</body>
</html>'''


def render_page(template, title='', **context):
    body = render_template_string(template, **context)
    return render_template_string(PAGE_TEMPLATE, title=title, body=body)
