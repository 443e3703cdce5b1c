"""
Templates for the static gallery files.

Rendered with bottle's SimpleTemplate. The page template escapes {{ }}
expressions for HTML; the stylesheet, script and readme templates are
compiled with noescape=True.
"""

INDEX_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<meta name="generator" content="photogallery {{version}}">
<title>{{title}}</title>
<link rel="stylesheet" href="style.css">
</head>
<body class="theme-{{theme}}">
<header class="gallery-header">
<h1>{{title}}</h1>
<p class="gallery-count">{{len(images)}} {{'photo' if len(images) == 1 else 'photos'}}</p>
</header>
<main class="gallery-grid" id="gallery">
% for image in images:
<figure class="gallery-item" data-index="{{image.index}}">
<a class="gallery-link" href="{{image.full.relative_path}}" data-width="{{image.full.width}}" data-height="{{image.full.height}}">
<img src="{{image.thumbnail.relative_path}}" width="{{image.thumbnail.width}}" height="{{image.thumbnail.height}}" alt="{{image.title or image.source.filename}}"{{!' loading="lazy"' if lazy_load else ''}}>
</a>
% if image.title or image.description:
<figcaption>
% if image.title:
<span class="gallery-title">{{image.title}}</span>
% end
% if image.description:
<span class="gallery-description">{{image.description}}</span>
% end
</figcaption>
% end
</figure>
% end
</main>
% if lightbox:
<div class="lightbox" id="lightbox" hidden aria-hidden="true" role="dialog">
<button type="button" class="lightbox-close" aria-label="Close">&times;</button>
<button type="button" class="lightbox-prev" aria-label="Previous">&#8249;</button>
<figure class="lightbox-figure">
<img class="lightbox-image" src="" alt="">
<figcaption class="lightbox-caption">
<span class="lightbox-title"></span>
<span class="lightbox-description"></span>
<span class="lightbox-counter"></span>
</figcaption>
</figure>
<button type="button" class="lightbox-next" aria-label="Next">&#8250;</button>
</div>
% end
<script type="application/json" id="gallery-data">{{!data_json}}</script>
<script src="script.js"></script>
</body>
</html>
"""

STYLE_TEMPLATE = """\
/* generated by photogallery {{version}} */

:root {
  --background: {{colors['background']}};
  --surface: {{colors['surface']}};
  --text: {{colors['text']}};
  --muted: {{colors['muted']}};
  --accent: {{colors['accent']}};
  --overlay: {{colors['overlay']}};
  --columns: {{columns}};
  --thumbnail-size: {{thumbnail_size}}px;
}

* {
  box-sizing: border-box;
}

body {
  margin: 0;
  background: var(--background);
  color: var(--text);
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
  line-height: 1.4;
}

body.lightbox-open {
  overflow: hidden;
}

.gallery-header {
  padding: 2rem 1.5rem 1rem;
  text-align: center;
}

.gallery-header h1 {
  margin: 0;
  font-weight: 300;
  font-size: 2rem;
}

.gallery-count {
  margin: 0.25rem 0 0;
  color: var(--muted);
}

.gallery-grid {
  display: grid;
  grid-template-columns: repeat(var(--columns), minmax(0, 1fr));
  gap: 1rem;
  max-width: calc(var(--columns) * (var(--thumbnail-size) + 1rem) + 2rem);
  margin: 0 auto;
  padding: 1rem 1.5rem 3rem;
}

.gallery-item {
  margin: 0;
  background: var(--surface);
  border-radius: 4px;
  overflow: hidden;
}

.gallery-link {
  display: flex;
  align-items: center;
  justify-content: center;
  aspect-ratio: 1 / 1;
  background: var(--surface);
}

.gallery-link img {
  display: block;
  max-width: 100%;
  max-height: 100%;
  width: auto;
  height: auto;
  transition: opacity 0.2s ease;
}

.gallery-link:hover img,
.gallery-link:focus img {
  opacity: 0.85;
}

.gallery-item figcaption {
  padding: 0.5rem 0.75rem 0.75rem;
  font-size: 0.875rem;
}

.gallery-title {
  display: block;
  font-weight: 600;
}

.gallery-description {
  display: block;
  color: var(--muted);
}

.lightbox {
  position: fixed;
  inset: 0;
  z-index: 100;
  display: flex;
  align-items: center;
  justify-content: center;
  background: var(--overlay);
}

.lightbox[hidden] {
  display: none;
}

.lightbox-figure {
  margin: 0;
  max-width: 90vw;
  text-align: center;
}

.lightbox-image {
  display: block;
  max-width: 90vw;
  max-height: 80vh;
  width: auto;
  height: auto;
  margin: 0 auto;
}

.lightbox-caption {
  padding-top: 0.75rem;
  color: #f0f0f0;
}

.lightbox-caption span {
  display: block;
}

.lightbox-title {
  font-weight: 600;
}

.lightbox-counter {
  color: #a0a0a0;
  font-size: 0.8rem;
}

.lightbox button {
  position: absolute;
  border: 0;
  background: transparent;
  color: #ffffff;
  font-size: 3rem;
  line-height: 1;
  cursor: pointer;
  padding: 0.5rem 1rem;
}

.lightbox-close {
  top: 0.5rem;
  right: 0.5rem;
}

.lightbox-prev {
  left: 0.5rem;
  top: 50%;
  transform: translateY(-50%);
}

.lightbox-next {
  right: 0.5rem;
  top: 50%;
  transform: translateY(-50%);
}

@media (max-width: 900px) {
  .gallery-grid {
    grid-template-columns: repeat(min(var(--columns), 3), minmax(0, 1fr));
  }
}

@media (max-width: 600px) {
  .gallery-grid {
    grid-template-columns: repeat(min(var(--columns), 2), minmax(0, 1fr));
    gap: 0.5rem;
    padding: 0.5rem;
  }
}
"""

SCRIPT_TEMPLATE = """\
/* generated by photogallery {{version}} */
(function () {
  'use strict';

  var LIGHTBOX_ENABLED = {{'true' if lightbox else 'false'}};

  var dataNode = document.getElementById('gallery-data');
  var images = dataNode ? JSON.parse(dataNode.textContent) : [];
  var grid = document.getElementById('gallery');
  var lightbox = document.getElementById('lightbox');
  var current = -1;

  if (!LIGHTBOX_ENABLED || !lightbox || !grid || images.length === 0) {
    return;
  }

  var lightboxImage = lightbox.querySelector('.lightbox-image');
  var lightboxTitle = lightbox.querySelector('.lightbox-title');
  var lightboxDescription = lightbox.querySelector('.lightbox-description');
  var lightboxCounter = lightbox.querySelector('.lightbox-counter');

  function wrap(position) {
    return (position + images.length) % images.length;
  }

  function positionOf(index) {
    for (var i = 0; i < images.length; i++) {
      if (images[i].index === index) {
        return i;
      }
    }
    return -1;
  }

  function preload(position) {
    var preloaded = new Image();
    preloaded.src = images[wrap(position)].full;
  }

  function show(position) {
    current = wrap(position);
    var item = images[current];
    lightboxImage.src = item.full;
    lightboxImage.width = item.full_width;
    lightboxImage.height = item.full_height;
    lightboxImage.alt = item.title || '';
    lightboxTitle.textContent = item.title;
    lightboxDescription.textContent = item.description;
    lightboxCounter.textContent = (current + 1) + ' / ' + images.length;
    if (images.length > 1) {
      preload(current + 1);
      preload(current - 1);
    }
  }

  function open(position) {
    show(position);
    lightbox.hidden = false;
    lightbox.setAttribute('aria-hidden', 'false');
    document.body.classList.add('lightbox-open');
  }

  function close() {
    lightbox.hidden = true;
    lightbox.setAttribute('aria-hidden', 'true');
    document.body.classList.remove('lightbox-open');
    lightboxImage.src = '';
    current = -1;
  }

  function next() {
    show(current + 1);
  }

  function previous() {
    show(current - 1);
  }

  grid.addEventListener('click', function (event) {
    var link = event.target.closest('.gallery-link');
    if (!link) {
      return;
    }
    var figure = link.closest('.gallery-item');
    var position = positionOf(parseInt(figure.getAttribute('data-index'), 10));
    if (position < 0) {
      return;
    }
    event.preventDefault();
    open(position);
  });

  lightbox.querySelector('.lightbox-close').addEventListener('click', close);
  lightbox.querySelector('.lightbox-next').addEventListener('click', next);
  lightbox.querySelector('.lightbox-prev').addEventListener('click', previous);

  lightbox.addEventListener('click', function (event) {
    if (event.target === lightbox) {
      close();
    }
  });

  document.addEventListener('keydown', function (event) {
    if (lightbox.hidden) {
      return;
    }
    if (event.key === 'Escape') {
      close();
    } else if (event.key === 'ArrowRight') {
      next();
    } else if (event.key === 'ArrowLeft') {
      previous();
    }
  });
})();
"""

README_TEMPLATE = """\
{{title}}
{{'=' * len(title)}}

Static photo gallery generated by photogallery {{version}}.
Open {{index_filename}} in a web browser; no server or network connection is needed.

Images: {{len(images)}}
Skipped: {{len(skipped)}}
% for path, reason in skipped:
  - {{path}}: {{reason}}
% end

--- generation info ---
Generated: {{generated_at}}
--- end generation info ---

Configuration:
% for key, value in config_items:
  {{key}}: {{value}}
% end

Files:
  {{index_filename}}    gallery page
  style.css     stylesheet
  script.js     full-view navigation
  README.txt    this file
  images/       {{len(images) * 2}} renditions (full size and thumbnail)
"""
