"""
tests/test_pipeline.py — End-to-end run over raw extracts written to disk.
"""

from __future__ import annotations

import geopandas as gpd
import pandas as pd
import pytest

from toronto_canopy import io, qc
from toronto_canopy.cleaning import MissingColumnError
from toronto_canopy.pipeline import clean_all, run_pipeline


@pytest.fixture
def output_files(tmp_path) -> dict:
    processed = tmp_path / "processed"
    return {
        "trees_clean": processed / "clean_tree_data.csv",
        "census_clean": processed / "clean_neighbourhood_census_data.csv",
        "census_proportional": processed / "proportional_neighbourhood_census_data.csv",
        "neighbourhoods_clean": processed / "clean_neighbourhood_map_data.parquet",
        "neighbourhoods_clean_geojson": processed / "clean_neighbourhood_map_data.geojson",
    }


class TestLoadRawExtracts:

    def test_missing_file(self, tmp_path):
        files = {
            "trees": tmp_path / "nope.csv",
            "census": tmp_path / "nope.csv",
            "neighbourhoods": tmp_path / "nope.geojson",
        }
        with pytest.raises(FileNotFoundError):
            io.load_raw_extracts(files)

    def test_census_read_as_text(self, raw_input_files):
        raw = io.load_raw_extracts(raw_input_files)
        assert raw["census"]["Agincourt North"].map(type).eq(str).all()


class TestRunPipeline:

    def test_writes_every_output(self, raw_input_files, output_files):
        _, paths = run_pipeline(raw_input_files, output_files, verbose=False)
        assert set(paths) == set(output_files)
        for path in paths.values():
            assert path.exists()

    def test_outputs_round_trip(self, raw_input_files, output_files):
        run_pipeline(raw_input_files, output_files, verbose=False)

        trees = pd.read_csv(output_files["trees_clean"])
        assert len(trees) == 5
        assert (trees["trunk_diameter"] == 0).sum() == 0
        assert trees.loc[trees["tree_id"] == 1, "longitude"].iloc[0] == pytest.approx(-79.38)

        census = pd.read_csv(output_files["census_clean"])
        prop = pd.read_csv(output_files["census_proportional"])
        assert census["code"].tolist() == [129, 128]
        assert prop["code"].tolist() == [129, 128]

        polygons = gpd.read_parquet(output_files["neighbourhoods_clean"])
        assert polygons["code"].tolist() == [129, 128]
        assert polygons.crs == "EPSG:4326"
        assert polygons["area_sq_km"].tolist() == pytest.approx([1.0, 2.0], rel=1e-6)

    def test_join_keys_consistent(self, raw_input_files, output_files):
        tables, _ = run_pipeline(raw_input_files, output_files, verbose=False)
        qc.check_join_integrity(tables["census_clean"], tables["neighbourhoods_clean"])
        assert tables["census_clean"]["code"].dtype == tables["neighbourhoods_clean"]["code"].dtype

    def test_verbose_prints_logs(self, raw_input_files, output_files, capsys):
        run_pipeline(raw_input_files, output_files, verbose=True)
        out = capsys.readouterr().out
        assert "[TREES]" in out
        assert "[CENSUS]" in out
        assert "[NEIGHBOURHOODS]" in out


class TestCleanAll:

    def test_structural_failure_halts(self, raw_trees_df, raw_census_df, raw_neighbourhoods_gdf):
        raw = {
            "trees": raw_trees_df,
            "census": raw_census_df.drop(columns=["Data Source"]),
            "neighbourhoods": raw_neighbourhoods_gdf,
        }
        with pytest.raises(MissingColumnError, match="data_source"):
            clean_all(raw)

    def test_branches_independent(self, raw_trees_df, raw_census_df, raw_neighbourhoods_gdf):
        raw = {"trees": raw_trees_df, "census": raw_census_df, "neighbourhoods": raw_neighbourhoods_gdf}
        tables, logs = clean_all(raw)
        assert set(logs) == {"trees", "census", "neighbourhoods"}
        assert len(tables["trees_clean"]) == len(raw_trees_df)


class TestWriters:

    def test_write_table_creates_folder(self, tmp_path):
        path = io.write_table(pd.DataFrame({"code": [1, 2]}), tmp_path / "nested" / "table.csv")
        assert path.exists()
        assert pd.read_csv(path)["code"].tolist() == [1, 2]

    def test_boundaries_written_in_web_crs(self, raw_neighbourhoods_gdf, output_files):
        metric = raw_neighbourhoods_gdf.to_crs("EPSG:26917")
        parquet_path, geojson_path = io.write_boundaries(
            metric,
            output_files["neighbourhoods_clean"],
            output_files["neighbourhoods_clean_geojson"],
        )
        assert gpd.read_parquet(parquet_path).crs.to_epsg() == 4326
        assert gpd.read_file(geojson_path).crs.to_epsg() == 4326

    def test_boundaries_require_geometry(self, output_files):
        with pytest.raises(TypeError):
            io.write_boundaries(
                pd.DataFrame({"code": [1]}),
                output_files["neighbourhoods_clean"],
                output_files["neighbourhoods_clean_geojson"],
            )

    def test_boundary_reader_leaves_crs_alone(self, tmp_path, raw_neighbourhoods_gdf):
        path = tmp_path / "boundaries.geojson"
        raw_neighbourhoods_gdf.to_file(path, driver="GeoJSON")
        assert io.read_boundary_extract(path).crs.to_epsg() == 4326
