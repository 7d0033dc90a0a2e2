from coastercad.batch import BatchConfig, BatchProcessor
from coastercad.io import read_stl
from coastercad.settings import CoasterSpec, ShapeKind, TextElement
from coastercad.templates import builtin_templates
from coastercad.text3d import lit_pixels


def test_generate_set(tmp_path):
    progress = []
    config = BatchConfig(output_directory=str(tmp_path / "out"), progress_callback=progress.append)
    result = BatchProcessor().generate_set(CoasterSpec(), 3, config)

    assert result.total_count == 3
    assert result.success_count == 3
    assert result.failed_count == 0
    assert result.all_succeeded
    assert progress == [33, 66, 100]
    assert [item.file_name for item in result.items] == [
        "coaster_001.stl", "coaster_002.stl", "coaster_003.stl"]
    for item in result.items:
        assert (tmp_path / "out" / item.file_name).exists()
        assert item.validation.is_valid
    assert result.elapsed_seconds >= 0.0


def test_generate_batch_with_shape_in_name(tmp_path):
    specs = [CoasterSpec(shape=ShapeKind.SQUARE), CoasterSpec(shape=ShapeKind.HEXAGON)]
    config = BatchConfig(output_directory=str(tmp_path), file_name_pattern="{index}_{shape}.stl",
                         binary=False)
    result = BatchProcessor().generate_batch(specs, config)
    assert result.all_succeeded
    assert (tmp_path / "1_square.stl").read_text().startswith("solid coastercad_coaster")
    assert (tmp_path / "2_hexagon.stl").exists()


def test_out_of_range_spec_is_clamped(tmp_path):
    spec = CoasterSpec(diameter=500.0)
    result = BatchProcessor().generate_batch([spec], BatchConfig(output_directory=str(tmp_path)))
    assert result.all_succeeded
    assert result.items[0].validation.size.x == 150.0
    result = BatchProcessor().generate_set(spec, 1, BatchConfig(output_directory=str(tmp_path)))
    assert result.all_succeeded


def test_failures_are_recorded(tmp_path):
    config = BatchConfig(output_directory=str(tmp_path), file_name_pattern="{missing}.stl")
    result = BatchProcessor().generate_set(CoasterSpec(), 3, config)
    assert result.failed_count == 3
    assert len(result.items) == 3
    assert not result.all_succeeded
    assert all(not item.success and item.error for item in result.items)


def test_stop_on_error(tmp_path):
    config = BatchConfig(output_directory=str(tmp_path), file_name_pattern="{missing}.stl",
                         stop_on_error=True)
    result = BatchProcessor().generate_set(CoasterSpec(), 3, config)
    assert result.failed_count == 1
    assert len(result.items) == 1


def test_generate_from_templates(tmp_path):
    templates = builtin_templates()
    config = BatchConfig(output_directory=str(tmp_path), file_name_pattern="t{index}.stl")
    result = BatchProcessor().generate_from_templates(templates, config)
    assert result.success_count == len(templates)
    assert sorted(p.name for p in tmp_path.iterdir()) == [f"t{i}.stl" for i in range(1, 6)]


def test_generate_personalized(tmp_path):
    config = BatchConfig(output_directory=str(tmp_path), model_name="guest")
    result = BatchProcessor().generate_personalized(
        CoasterSpec(), ["AL", "BO"], config, text_template=TextElement(font_size=10.0))
    assert result.all_succeeded

    counts = [read_stl(tmp_path / name).triangle_count for name in ("coaster_001.stl", "coaster_002.stl")]
    assert counts[0] == 256 + 12 * (lit_pixels("A") + lit_pixels("L"))
    assert counts[1] == 256 + 12 * (lit_pixels("B") + lit_pixels("O"))
    assert (tmp_path / "coaster_002.stl").read_bytes().startswith(b"guest")
