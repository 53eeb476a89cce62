""" Test package for the RTF/CRE dictionary library. __init__.py loads common test resources. """

import json
import os

_data_dir = os.path.join(os.path.dirname(__file__), "data")
TEST_RTF_PATH = os.path.join(_data_dir, "sample.rtf")
TEST_JSON_PATH = os.path.join(_data_dir, "sample.json")
with open(TEST_RTF_PATH, 'rb') as fp:
    TEST_RTF = fp.read()
with open(TEST_JSON_PATH, encoding='utf-8') as fp:
    TEST_TRANSLATIONS = json.load(fp)
# Comments in the sample document by stroke.
TEST_COMMENTS = {"KA*T": "proper noun",
                 "TEFGT": "inversion"}
del _data_dir
