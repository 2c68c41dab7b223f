"""Jinja2 template for the listing and upload page."""

LISTING_PAGE = """
<!doctype html>
<html>
  <head>
    <title>{{ title }}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
      body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
      h1, h3 { color: #333; }
      .upload-form { margin: 20px 0; padding: 15px; background: #e9e9e9; border-radius: 5px; }
      .upload-form button { margin-top: 10px; padding: 8px 16px; background: #4CAF50; color: #fff;
                            border: none; border-radius: 4px; cursor: pointer; }
      .breadcrumb { margin-bottom: 15px; padding: 8px; background: #f0f0f0; border-radius: 4px; }
      .file, .folder { margin: 5px 0; padding: 8px; border-radius: 4px; }
      .file { background: #f5f5f5; }
      .folder { background: #e1f5fe; cursor: pointer; }
      .folder a { font-weight: bold; color: #0277bd; }
      a { text-decoration: none; color: #0066cc; }
      a:hover { text-decoration: underline; }
      .children { margin-left: 20px; border-left: 1px solid #ccc; padding-left: 10px; display: none; }
      .expanded + .children { display: block; }
      .controls { margin: 15px 0; display: flex; gap: 8px; }
      .controls input { flex: 1; padding: 8px 12px; border: 1px solid #ccc; border-radius: 4px; }
      .hidden { display: none !important; }
    </style>
    <script>
      function toggleFolder(el, event) {
        if (event.target.tagName === 'A') { return; }
        el.classList.toggle('expanded');
      }
      function setAllFolders(expand) {
        document.querySelectorAll('.folder').forEach(f => f.classList.toggle('expanded', expand));
      }
      function filterEntries() {
        const term = document.getElementById('search').value.toLowerCase().trim();
        const items = Array.from(document.querySelectorAll('.file, .folder')).reverse();
        let visible = 0;
        items.forEach(item => {
          const name = item.querySelector('a').textContent.toLowerCase();
          let match = term === '' || name.includes(term);
          const children = item.classList.contains('folder') ? item.nextElementSibling : null;
          if (children && term !== '' && children.querySelector('.file:not(.hidden), .folder:not(.hidden)')) {
            match = true;
            item.classList.add('expanded');
          }
          item.classList.toggle('hidden', !match);
          if (match) { visible++; }
        });
        document.getElementById('no-results').classList.toggle('hidden', visible > 0 || items.length === 0);
      }
    </script>
  </head>
  <body>
    <h1>{{ title }}</h1>

    <div class="upload-form">
      <h3>Upload File</h3>
      <form method="post" enctype="multipart/form-data">
        <input type="file" name="file" required>
        <input type="hidden" name="path" value="{{ current_path }}">
        <br>
        <button type="submit">Upload</button>
      </form>
    </div>

    {% if current_path %}
    <div class="breadcrumb">
      <a href="{{ url_for('index') }}">Home</a>
      {% for crumb in breadcrumbs %}
        / <a href="{{ url_for('index', path=crumb.path) }}">{{ crumb.name }}</a>
      {% endfor %}
    </div>
    {% endif %}

    <h3>Files and Folders</h3>
    <div class="controls">
      <input type="text" id="search" placeholder="Search files and folders..." autocomplete="off"
             oninput="filterEntries()">
      <button type="button" onclick="setAllFolders(true)">Expand all</button>
      <button type="button" onclick="setAllFolders(false)">Collapse all</button>
    </div>
    <p id="no-results" class="hidden">No files or folders match your search.</p>

    {% if files %}
    {% for node in files recursive %}
      {% if node.is_dir %}
        <div class="folder" onclick="toggleFolder(this, event)">
          &#128193; <a href="{{ url_for('index', path=node.path) }}">{{ node.name }}</a>
        </div>
        <div class="children">{{ loop(node.children) }}</div>
      {% else %}
        <div class="file">
          <a href="{{ url_for('download_file', filename=node.path) }}">{{ node.name }}</a> ({{ node.size }} bytes)
        </div>
      {% endif %}
    {% endfor %}
    {% else %}
      <p>No files found</p>
    {% endif %}
  </body>
</html>
"""
