"""Tests for GalleryOrchestrator class."""

import os
import re
from unittest.mock import MagicMock

import pytest
from PIL import Image

from photogallery.asset_descriptor import AssetDescriptor
from photogallery.batch_processor import BatchProcessor, CancellationToken
from photogallery.errors import RenderFailure
from photogallery.gallery_config import GalleryConfig
from photogallery.gallery_renderer import GalleryRenderer
from photogallery.orchestrator import GalleryOrchestrator, GenerationOutcome, NO_FILES_MESSAGE

TOP_LEVEL_FILES = ['README.txt', 'images', 'index.html', 'script.js', 'style.css']


def read(path):
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


class TestGenerationOutcome:
    """Tests for GenerationOutcome class."""

    def test_truthiness_follows_success(self):
        assert bool(GenerationOutcome(success=True, message='ok')) is True
        assert bool(GenerationOutcome(success=False, message='no')) is False

    def test_summary_success(self):
        outcome = GenerationOutcome(
            success=True, message='ok', output_path='/tmp/g', processed=2,
            skipped=[('/x/bad.jpg', 'Cannot decode image')],
            files_created=['index.html', 'style.css'],
        )

        summary = outcome.summary()

        assert 'Location: /tmp/g' in summary
        assert 'Images: 2' in summary
        assert 'Skipped: 1' in summary
        assert 'Open index.html' in summary

    def test_summary_failure_is_message(self):
        outcome = GenerationOutcome(success=False, message='Gallery generation failed: boom')

        assert outcome.summary() == 'Gallery generation failed: boom'


class TestGalleryOrchestrator:
    """Tests for GalleryOrchestrator class."""

    @pytest.fixture
    def orchestrator(self, logger):
        return GalleryOrchestrator(logger=logger)

    def test_three_jpegs(self, orchestrator, three_jpegs, output_dir, gallery_config):
        """Test 3 valid JPEGs give 4 gallery files and 6 renditions."""
        outcome = orchestrator.generate(three_jpegs, gallery_config)

        assert outcome
        assert outcome.success is True
        assert outcome.processed == 3
        assert outcome.message == 'Successfully completed Photo Gallery generation'
        assert sorted(os.listdir(output_dir)) == TOP_LEVEL_FILES
        assert len(os.listdir(os.path.join(output_dir, 'images'))) == 6
        assert outcome.files_created == ['index.html', 'style.css', 'script.js', 'README.txt']
        assert outcome.missing_files == []

    def test_no_files_selected(self, orchestrator, output_dir, gallery_config):
        """Test an empty selection fails without touching the filesystem."""
        outcome = orchestrator.generate([], gallery_config)

        assert not outcome
        assert outcome.message == NO_FILES_MESSAGE
        assert not os.path.exists(output_dir)

    def test_corrupt_item_is_skipped(self, orchestrator, mixed_batch, output_dir, gallery_config):
        """Test 2 valid + 1 corrupt still succeeds with 2 images."""
        outcome = orchestrator.generate(mixed_batch, gallery_config)

        assert outcome
        assert outcome.processed == 2
        assert len(outcome.skipped) == 1
        assert outcome.skipped[0][0].endswith('broken.jpg')

        html = read(os.path.join(output_dir, 'index.html'))
        assert html.count('class="gallery-item"') == 2
        assert re.findall(r'data-index="(\d+)"', html) == ['0', '2']

        readme = read(os.path.join(output_dir, 'README.txt'))
        assert 'Skipped: 1' in readme
        assert 'broken.jpg' in readme
        assert len(os.listdir(os.path.join(output_dir, 'images'))) == 4

    def test_failed_thumbnail_leaves_two_files_per_image(self, orchestrator, make_image, output_dir,
                                                         gallery_config, mocker):
        """Test images/ holds exactly two renditions per image in the gallery."""
        descriptors = [
            AssetDescriptor(path=make_image('one.jpg')),
            AssetDescriptor(path=make_image('bad.jpg')),
            AssetDescriptor(path=make_image('two.jpg')),
        ]
        real_save = Image.Image.save

        def failing_save(img, fp, *args, **kwargs):
            if os.path.basename(str(fp)).startswith('bad_thumb'):
                raise OSError('disk full')
            return real_save(img, fp, *args, **kwargs)

        mocker.patch.object(Image.Image, 'save', autospec=True, side_effect=failing_save)

        outcome = orchestrator.generate(descriptors, gallery_config)

        assert outcome
        assert outcome.processed == 2
        images = sorted(os.listdir(os.path.join(output_dir, 'images')))
        assert len(images) == 2 * outcome.processed
        assert 'bad_full.jpg' not in images

    def test_rerun_is_idempotent(self, orchestrator, three_jpegs, output_dir, gallery_config):
        """Test a second run into the same folder overwrites in place."""
        assert orchestrator.generate(three_jpegs, gallery_config)
        first_images = sorted(os.listdir(os.path.join(output_dir, 'images')))
        first_html = read(os.path.join(output_dir, 'index.html'))

        assert orchestrator.generate(three_jpegs, gallery_config)

        assert sorted(os.listdir(os.path.join(output_dir, 'images'))) == first_images
        assert read(os.path.join(output_dir, 'index.html')) == first_html
        assert sorted(os.listdir(output_dir)) == TOP_LEVEL_FILES

    def test_progress_reaches_total(self, orchestrator, three_jpegs, gallery_config):
        """Test progress counts each item then announces rendering."""
        calls = []

        orchestrator.generate(three_jpegs, gallery_config, on_progress=lambda *call: calls.append(call))

        assert [c[0] for c in calls] == [1, 2, 3, 3]
        assert calls[-1] == (3, 3, 'Generating HTML files...')

    def test_progress_never_goes_backwards(self, orchestrator, mixed_batch, gallery_config):
        """Test item progress rises strictly and the render step repeats the final count."""
        calls = []

        orchestrator.generate(mixed_batch, gallery_config, on_progress=lambda *call: calls.append(call))

        item_counts = [c[0] for c in calls[:-1]]
        assert item_counts == list(range(1, len(mixed_batch) + 1))
        counts = [c[0] for c in calls]
        assert all(a <= b for a, b in zip(counts, counts[1:]))
        assert calls[-1][:2] == (len(mixed_batch), len(mixed_batch))

    def test_invalid_config_writes_nothing(self, orchestrator, three_jpegs, output_dir):
        config = GalleryConfig(output_path=output_dir, quality=0)

        outcome = orchestrator.generate(three_jpegs, config)

        assert not outcome
        assert 'quality' in outcome.message
        assert not os.path.exists(output_dir)

    def test_output_path_is_a_file(self, orchestrator, three_jpegs, tmp_path):
        target = tmp_path / 'taken'
        target.write_text('x')

        outcome = orchestrator.generate(three_jpegs, GalleryConfig(output_path=str(target)))

        assert not outcome
        assert 'not a folder' in outcome.message

    def test_all_items_fail(self, orchestrator, corrupt_image, output_dir, gallery_config):
        """Test a batch with no usable images is reported as a failure."""
        outcome = orchestrator.generate([AssetDescriptor(path=corrupt_image)], gallery_config)

        assert not outcome
        assert outcome.message.startswith('Gallery generation failed:')
        assert not os.path.exists(os.path.join(output_dir, 'index.html'))

    def test_render_failure_is_reported(self, three_jpegs, gallery_config, logger):
        """Test renderer errors become a failed outcome, not an exception."""
        renderer = MagicMock(spec=GalleryRenderer)
        renderer.render.side_effect = RenderFailure('style.css', 'disk full')
        orchestrator = GalleryOrchestrator(renderer=renderer, logger=logger)

        outcome = orchestrator.generate(three_jpegs, gallery_config)

        assert not outcome
        assert 'Could not write style.css' in outcome.message
        assert outcome.processed == 3

    def test_unexpected_error_is_contained(self, three_jpegs, gallery_config, logger):
        processor = MagicMock(spec=BatchProcessor)
        processor.run.side_effect = RuntimeError('something odd')
        orchestrator = GalleryOrchestrator(processor=processor, logger=logger)

        outcome = orchestrator.generate(three_jpegs, gallery_config)

        assert not outcome
        assert outcome.message == 'Gallery generation failed: something odd'

    def test_missing_output_files_fail_the_run(self, three_jpegs, gallery_config, logger):
        """Test verification turns missing gallery files into a failure."""
        renderer = MagicMock(spec=GalleryRenderer)
        orchestrator = GalleryOrchestrator(renderer=renderer, logger=logger)

        outcome = orchestrator.generate(three_jpegs, gallery_config)

        assert not outcome
        assert outcome.missing_files == ['index.html', 'style.css', 'script.js', 'README.txt']
        assert 'missing' in outcome.message

    def test_cancelled_run(self, orchestrator, three_jpegs, output_dir, gallery_config):
        """Test cancellation gives a distinct, unsuccessful outcome."""
        token = CancellationToken()

        def cancel_after_first(current, total, message):
            token.cancel()

        outcome = orchestrator.generate(three_jpegs, gallery_config, cancel_after_first, token)

        assert not outcome
        assert outcome.cancelled is True
        assert outcome.processed == 1
        assert 'cancelled' in outcome.message
        assert len(os.listdir(os.path.join(output_dir, 'images'))) == 2
        assert not os.path.exists(os.path.join(output_dir, 'index.html'))

    def test_verify_reports_present_and_missing(self, orchestrator, tmp_path):
        (tmp_path / 'index.html').write_text('x')
        (tmp_path / 'style.css').write_text('x')
        config = GalleryConfig(output_path=str(tmp_path))

        created, missing = orchestrator.verify(str(tmp_path), config)

        assert created == ['index.html', 'style.css']
        assert missing == ['script.js', 'README.txt']
