"""
End-to-end tests for the blend pipeline driver.

Tests cover:
- Artifact set with and without step export
- Final composite values
- Blend order follows sorted filenames
- Empty input folder
- Decode failures (fatal by default, skippable on request)
- Encode failures (tolerated for intermediates, fatal for the final)
"""

import logging

import numpy as np
import pytest
from PIL import Image

from OB_Libs.ImageEditingLib.errors import ConfigError, DecodeError, EncodeError
from OB_Libs.NodesLib.output_node import OutputNodeConfig, OutputNodeHandler
from OB_Libs.PipelineLib.pipeline_config import PipelineConfig
from OB_Libs.PipelineLib.pipeline_driver import run_pipeline

from conftest import write_png


def make_config(input_dir, output_dir, **overrides):
    settings = dict(
        input_dir=str(input_dir),
        output_dir=str(output_dir),
        width=100,
        height=100,
        alpha=0.5,
        resampler="nearest",
    )
    settings.update(overrides)
    return PipelineConfig(**settings)


def read_pixel(path, xy=(0, 0)):
    with Image.open(path) as image:
        return image.getpixel(xy)


class TestArtifacts:

    def test_final_only_by_default(self, png_dir, output_dir):
        result = run_pipeline(make_config(png_dir, output_dir))

        assert sorted(p.name for p in output_dir.iterdir()) == ["step3_final.png"]
        assert result.final_path == output_dir.resolve() / "step3_final.png"
        assert result.written == [result.final_path]
        assert [p.name for p in result.processed] == ["a.png", "b.png", "c.png"]

    def test_steps_mode_writes_every_stage(self, png_dir, output_dir):
        result = run_pipeline(make_config(png_dir, output_dir, export_steps=True))

        assert sorted(p.name for p in output_dir.iterdir()) == [
            "step1_resize_0.png",
            "step1_resize_1.png",
            "step1_resize_2.png",
            "step2_combined_1.png",
            "step2_combined_2.png",
            "step3_final.png",
        ]
        assert len(result.written) == 6

    def test_artifacts_have_target_size(self, png_dir, output_dir):
        run_pipeline(make_config(png_dir, output_dir, width=64, height=48,
                                 export_steps=True, resampler="bicubic"))

        for path in output_dir.iterdir():
            with Image.open(path) as image:
                assert image.size == (64, 48)
                assert image.mode == "RGBA"

    def test_final_composite_values(self, png_dir, output_dir):
        """red, then green, then blue, each at half opacity."""
        result = run_pipeline(make_config(png_dir, output_dir))

        assert read_pixel(result.final_path, (50, 50)) == (63, 64, 128, 224)

    def test_resized_step_carries_opacity(self, png_dir, output_dir):
        run_pipeline(make_config(png_dir, output_dir, export_steps=True))

        assert read_pixel(output_dir / "step1_resize_0.png") == (255, 0, 0, 128)
        assert read_pixel(output_dir / "step2_combined_1.png") == (127, 128, 0, 192)

    def test_single_image_final_is_seed(self, tmp_path, output_dir):
        folder = tmp_path / "one"
        folder.mkdir()
        write_png(folder / "only.png", (5, 5), (10, 20, 30, 255))

        result = run_pipeline(make_config(folder, output_dir, export_steps=True))

        assert sorted(p.name for p in output_dir.iterdir()) == [
            "step1_resize_0.png",
            "step3_final.png",
        ]
        assert read_pixel(result.final_path) == (10, 20, 30, 128)

    def test_reruns_overwrite(self, png_dir, output_dir):
        run_pipeline(make_config(png_dir, output_dir))
        run_pipeline(make_config(png_dir, output_dir))

        assert sorted(p.name for p in output_dir.iterdir()) == ["step3_final.png"]


class TestOrdering:

    def test_order_follows_sorted_names(self, tmp_path):
        forward = tmp_path / "forward"
        backward = tmp_path / "backward"
        forward.mkdir()
        backward.mkdir()
        write_png(forward / "1.png", color=(255, 0, 0, 255))
        write_png(forward / "2.png", color=(0, 0, 255, 255))
        write_png(backward / "1.png", color=(0, 0, 255, 255))
        write_png(backward / "2.png", color=(255, 0, 0, 255))

        first = run_pipeline(make_config(forward, tmp_path / "out1"))
        second = run_pipeline(make_config(backward, tmp_path / "out2"))

        red_then_blue = read_pixel(first.final_path)
        blue_then_red = read_pixel(second.final_path)
        assert red_then_blue != blue_then_red
        assert red_then_blue[2] > red_then_blue[0]
        assert blue_then_red[0] > blue_then_red[2]

    def test_deterministic(self, png_dir, tmp_path):
        first = run_pipeline(make_config(png_dir, tmp_path / "out1", resampler="bicubic"))
        second = run_pipeline(make_config(png_dir, tmp_path / "out2", resampler="bicubic"))

        with Image.open(first.final_path) as a, Image.open(second.final_path) as b:
            assert np.array_equal(np.array(a), np.array(b))


class TestBoundaries:

    def test_empty_folder_succeeds_without_output(self, tmp_path, output_dir, caplog):
        folder = tmp_path / "empty"
        folder.mkdir()
        (folder / "readme.txt").write_text("no images here")

        with caplog.at_level(logging.WARNING):
            result = run_pipeline(make_config(folder, output_dir))

        assert result.final_path is None
        assert result.written == []
        assert not output_dir.exists()
        assert "No PNG images" in caplog.text

    def test_missing_input_folder(self, tmp_path, output_dir):
        with pytest.raises(ConfigError):
            run_pipeline(make_config(tmp_path / "missing", output_dir))


class TestDecodeFailures:

    @pytest.fixture
    def folder_with_bad_file(self, png_dir):
        (png_dir / "b.png").write_bytes(b"not a png at all")
        return png_dir

    def test_decode_error_is_fatal_by_default(self, folder_with_bad_file, output_dir):
        with pytest.raises(DecodeError) as excinfo:
            run_pipeline(make_config(folder_with_bad_file, output_dir))

        assert "b.png" in str(excinfo.value)
        assert not (output_dir / "step3_final.png").exists()

    def test_skip_bad_files(self, folder_with_bad_file, output_dir, caplog):
        with caplog.at_level(logging.WARNING):
            result = run_pipeline(
                make_config(folder_with_bad_file, output_dir, skip_bad_files=True)
            )

        assert [p.name for p in result.processed] == ["a.png", "c.png"]
        assert [p.name for p in result.skipped] == ["b.png"]
        assert result.final_path.exists()
        assert "Skipping" in caplog.text

    def test_all_files_bad(self, tmp_path, output_dir):
        folder = tmp_path / "bad"
        folder.mkdir()
        (folder / "a.png").write_bytes(b"junk")

        result = run_pipeline(make_config(folder, output_dir, skip_bad_files=True))

        assert result.final_path is None
        assert result.image_count == 0


class FailingHandler(OutputNodeHandler):
    """Handler that refuses to write names starting with a prefix."""

    def __init__(self, config, failing_prefix):
        super().__init__(config)
        self.failing_prefix = failing_prefix

    def save_image(self, image, template, index=None, stem=None):
        if template.startswith(self.failing_prefix):
            raise EncodeError(f"disk full while writing {template}")
        return super().save_image(image, template, index=index, stem=stem)


class TestEncodeFailures:

    def test_intermediate_failure_is_tolerated(self, png_dir, output_dir, caplog):
        handler = FailingHandler(OutputNodeConfig(output_dir=str(output_dir)), "step1")

        with caplog.at_level(logging.WARNING):
            result = run_pipeline(make_config(png_dir, output_dir, export_steps=True), handler)

        assert result.final_path.exists()
        assert sorted(p.name for p in result.written) == [
            "step2_combined_1.png",
            "step2_combined_2.png",
            "step3_final.png",
        ]
        assert "disk full" in caplog.text

    def test_final_failure_is_fatal(self, png_dir, output_dir):
        handler = FailingHandler(OutputNodeConfig(output_dir=str(output_dir)), "step3")

        with pytest.raises(EncodeError):
            run_pipeline(make_config(png_dir, output_dir), handler)
