import os

from dotenv import load_dotenv

# .envファイルを読み込む
load_dotenv()

# 総務省 全国地方公共団体コード
MUNICIPALITY_XLSX_URL = os.getenv(
    "MUNICIPALITY_XLSX_URL", "https://www.soumu.go.jp/main_content/000925835.xlsx")
# シート名は改定ごとに変わるため「現在」を含むシートを探す
WORKSHEET_NAME_MARKER = "現在"
DEFAULT_WORKSHEET_NAME = "R6.1.1現在の団体"

# 気象庁 予報区等の階層
JMA_AREA_URL = os.getenv(
    "JMA_AREA_URL", "https://www.jma.go.jp/bosai/common/const/area.json")
RESOLVE_JMA_HIERARCHY = os.getenv(
    "RESOLVE_JMA_HIERARCHY", "true").lower() == "true"

# 国土地理院 逆ジオコーダ
REVERSE_GEOCODER_URL = os.getenv(
    "REVERSE_GEOCODER_URL",
    "https://mreversegeocoder.gsi.go.jp/reverse-geocoder/LonLatToAddress")

# タイムアウト（秒）
REVERSE_GEOCODER_TIMEOUT = float(os.getenv("REVERSE_GEOCODER_TIMEOUT", "10"))
SOURCE_FETCH_TIMEOUT = float(os.getenv("SOURCE_FETCH_TIMEOUT", "60"))
