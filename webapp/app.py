from __future__ import annotations
from flask import Flask, request, redirect, render_template_string

from seqmap.map import SeqMap

app = Flask(__name__)

# In-memory only: the task list lives as long as the process does
tasks: SeqMap[int, str] = SeqMap()

HTML = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>SeqMap Web Demo</title>
</head>
<body>
  <h1>SeqMap Web Demo</h1>

  <h2>Add or update task</h2>
  <form method="post" action="/add">
    <label>ID (int):</label>
    <input name="id" required />
    <br />
    <label>Title (text):</label>
    <input name="title" required />
    <br />
    <button type="submit">Save</button>
  </form>
  {% if error %}
    <p style="color: red;">{{ error }}</p>
  {% endif %}

  <h2>Tasks ({{ rows|length }})</h2>
  {% if rows|length == 0 %}
    <p>No tasks yet.</p>
  {% else %}
    <table border="1" cellpadding="6" cellspacing="0">
      <tr>
        <th>position</th>
        <th>id</th>
        <th>title</th>
        <th>actions</th>
      </tr>
      {% for pos, task_id, title in rows %}
        <tr>
          <td>{{ pos }}</td>
          <td>{{ task_id }}</td>
          <td>{{ title }}</td>
          <td>
            <form method="post" action="/delete" style="display:inline;">
              <input type="hidden" name="id" value="{{ task_id }}" />
              <button type="submit">Delete</button>
            </form>
          </td>
        </tr>
      {% endfor %}
    </table>
  {% endif %}

  <p style="margin-top: 24px;">
    Updating an existing ID keeps its position. Deleting closes the gap.
  </p>
</body>
</html>
"""


def _parse_id(raw):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _render(error=None, status=200):
    rows = [(pos, task_id, title) for pos, (task_id, title) in enumerate(tasks.items())]
    return render_template_string(HTML, rows=rows, error=error), status


@app.get("/")
def home():
    return _render()


@app.post("/add")
def add():
    task_id = _parse_id(request.form.get("id"))
    title = request.form.get("title", "").strip()
    if task_id is None or not title:
        return _render(error="ID must be an integer and title must not be empty.", status=400)

    tasks.insert(task_id, title)
    return redirect("/")


@app.post("/delete")
def delete():
    task_id = _parse_id(request.form.get("id"))
    if task_id is not None:
        tasks.remove(task_id)
    return redirect("/")


if __name__ == "__main__":
    app.run(debug=True)
