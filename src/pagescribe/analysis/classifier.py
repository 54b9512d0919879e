from __future__ import annotations

from typing import Callable

from pagescribe.analysis.assertions import suggest_assertions
from pagescribe.analysis.features import detect_features
from pagescribe.config import ClassifierConfig
from pagescribe.dom.document import PageDocument
from pagescribe.models import ClassificationResult, PageFeatures, PageType
from pagescribe.utils import get_logger

logger = get_logger(__name__)

Predicate = Callable[[PageFeatures], bool]

BASE_CONFIDENCE = 50
GENERIC_CONFIDENCE = 30


class PageClassifier:
    """
    页面原型分类：特征向量 -> 有序决策表（第一个命中的规则胜出）。
    置信度只用于诊断，不参与分类决策。
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self.config = config or ClassifierConfig()
        max_fields = self.config.login_max_fields

        self._rules: tuple[tuple[PageType, Predicate], ...] = (
            (
                "login-form",
                lambda f: f.has_password_field
                and not f.has_confirm_password
                and f.form_field_count <= max_fields,
            ),
            (
                "registration-form",
                lambda f: f.has_password_field
                and f.has_confirm_password
                and f.form_field_count > max_fields,
            ),
            (
                "contact-form",
                lambda f: f.has_email_field and f.has_textarea and not f.has_password_field,
            ),
            ("search", lambda f: f.has_search_input and f.has_results_container),
            ("table", lambda f: f.has_table),
            ("list", lambda f: f.has_list),
            ("detail", lambda f: f.has_single_h1 and f.has_main_content),
        )

        # 每种类型命中后的加分项：(条件, 分值)
        self._boosts: dict[PageType, tuple[tuple[Predicate, int], ...]] = {
            "login-form": (
                (lambda f: f.has_password_field, 25),
                (lambda f: f.has_email_field or f.has_username_field, 15),
                (lambda f: f.form_field_count <= max_fields, 10),
            ),
            "registration-form": (
                (lambda f: f.has_password_field, 20),
                (lambda f: f.has_confirm_password, 25),
                (lambda f: f.form_field_count > max_fields, 5),
            ),
            "contact-form": (
                (lambda f: f.has_email_field, 20),
                (lambda f: f.has_textarea, 20),
                (lambda f: not f.has_password_field, 10),
            ),
            "search": (
                (lambda f: f.has_search_input, 25),
                (lambda f: f.has_results_container, 25),
            ),
            "table": ((lambda f: f.has_table, 40),),
            "list": ((lambda f: f.has_list, 35),),
            "detail": (
                (lambda f: f.has_single_h1, 20),
                (lambda f: f.has_main_content, 15),
                (lambda f: f.has_images, 10),
            ),
        }

    def classify_features(self, features: PageFeatures) -> PageType:
        for page_type, predicate in self._rules:
            if predicate(features):
                return page_type
        return "generic"

    def calculate_confidence(self, page_type: PageType, features: PageFeatures) -> int:
        boosts = self._boosts.get(page_type)
        if boosts is None:
            return GENERIC_CONFIDENCE
        confidence = BASE_CONFIDENCE + sum(points for predicate, points in boosts if predicate(features))
        return min(100, confidence)

    def classify(self, document: object) -> ClassificationResult:
        doc = PageDocument.wrap(document)
        features = detect_features(doc, self.config)
        page_type = self.classify_features(features)
        confidence = self.calculate_confidence(page_type, features)
        logger.debug("页面类型: %s (%d%%)", page_type, confidence)
        return ClassificationResult(
            page_type=page_type,
            confidence=confidence,
            features=features,
            suggested_assertions=suggest_assertions(page_type),
        )


_default_classifier = PageClassifier()


def classify_features(features: PageFeatures) -> PageType:
    return _default_classifier.classify_features(features)


def calculate_confidence(page_type: PageType, features: PageFeatures) -> int:
    return _default_classifier.calculate_confidence(page_type, features)


def classify(document: object, config: ClassifierConfig | None = None) -> ClassificationResult:
    classifier = _default_classifier if config is None else PageClassifier(config)
    return classifier.classify(document)
