from mermaidgen.agents.er_repair import (
    ER_REPAIRS,
    apply_er_repairs,
    flip_belongs_to_relationships,
    flip_product_category,
    normalize_spacing,
    remove_identifying_keyword,
    repair_er_diagram,
    replace_belongs_to_labels,
    replace_written_by_labels,
    split_glued_belongs_to,
)
from mermaidgen.agents.mermaid_syntax import is_valid_mermaid


class TestRepairRules:

    def test_belongs_to_relationship_is_flipped(self):
        assert (flip_belongs_to_relationships("ORDER_ITEM ||--o{ ORDER : belongs to")
                == "ORDER ||--o{ ORDER_ITEM : categorizes")

    def test_belongs_to_flip_ignores_case_and_spacing(self):
        assert flip_belongs_to_relationships("a||--o{b:Belongs  To") == "b ||--o{ a : categorizes"

    def test_belongs_to_label_keeps_following_word_separate(self):
        assert (replace_belongs_to_labels("BOOK }o--o{ SHELF : belongs to shelf")
                == "BOOK }o--o{ SHELF : categorizes shelf")

    def test_remaining_belongs_to_label(self):
        assert replace_belongs_to_labels("BOOK }o--o{ SHELF : belongs to") == "BOOK }o--o{ SHELF : categorizes"

    def test_belongs_to_label_keeps_line_breaks(self):
        code = "A ||--|| B : belongs to\nC ||--|| D : has"
        assert replace_belongs_to_labels(code) == "A ||--|| B : categorizes\nC ||--|| D : has"

    def test_written_by(self):
        assert replace_written_by_labels("BOOK ||--o{ AUTHOR : written by") == "BOOK ||--o{ AUTHOR : writes"

    def test_identifying_keyword_is_removed(self):
        assert remove_identifying_keyword("A ||--o{ B : IDENTIFYING has") == "A ||--o{ B : has"

    def test_identifying_inside_a_word_is_kept(self):
        assert remove_identifying_keyword("string IDENTIFYING_CODE") == "string IDENTIFYING_CODE"

    def test_glued_belongs_to_is_split(self):
        assert split_glued_belongs_to("PRODUCT : belongs toCATEGORY") == "CATEGORY ||--o{ PRODUCT : categorizes"

    def test_product_category_is_flipped_regardless_of_label(self):
        assert (flip_product_category("Product ||--o{ Category : is listed in")
                == "Category ||--o{ Product : categorizes")

    def test_product_category_leaves_other_pairs_alone(self):
        code = "ORDER ||--o{ PRODUCT : contains"
        assert flip_product_category(code) == code

    def test_spacing_is_normalized(self):
        code = "erDiagram\n\n    A||--o{B : has\n  C   ||--||  D : owns\n  E}o--o{F : uses  \n\n"
        assert normalize_spacing(code) == "erDiagram\nA ||--o{ B : has\nC ||--|| D : owns\nE }o--o{ F : uses"

    def test_pipeline_order(self):
        assert ER_REPAIRS[0] is flip_belongs_to_relationships
        assert ER_REPAIRS[-1] is normalize_spacing
        assert len(ER_REPAIRS) == 7


class TestRepairPipeline:

    def test_product_category_scenario(self):
        code = "erDiagram\n  PRODUCT ||--o{ CATEGORY : belongs to"
        repaired = repair_er_diagram(code)
        assert repaired == "erDiagram\nCATEGORY ||--o{ PRODUCT : categorizes"
        assert is_valid_mermaid(repaired)

    def test_identifying_before_belongs_to_is_settled_in_one_call(self):
        code = "erDiagram\n    A ||--o{ B : IDENTIFYING belongs to"
        once = apply_er_repairs(code)
        assert once == "erDiagram\nB ||--o{ A : categorizes"
        assert apply_er_repairs(once) == once

    def test_idempotent(self):
        code = ("erDiagram\n    CUSTOMER {\n        int id PK\n    }\n"
                "    ORDER ||--o{ CUSTOMER : belongs to\n    BOOK ||--o{ AUTHOR : written by")
        once = apply_er_repairs(code)
        assert apply_er_repairs(once) == once
        assert repair_er_diagram(repair_er_diagram(code)) == repair_er_diagram(code)

    def test_already_clean_diagram_only_loses_indentation(self):
        code = "erDiagram\n    CUSTOMER ||--o{ ORDER : places"
        assert repair_er_diagram(code) == "erDiagram\nCUSTOMER ||--o{ ORDER : places"

    def test_rollback_when_repair_breaks_validation(self):
        # The only entity block is named IDENTIFYING, so removing the keyword
        # leaves a bare brace and no ER evidence
        code = "erDiagram\n    IDENTIFYING {\n    }"
        assert is_valid_mermaid(code)
        assert not is_valid_mermaid(apply_er_repairs(code))
        assert repair_er_diagram(code) == code

    def test_invalid_input_stays_invalid_and_unchanged(self):
        code = "erDiagram"
        assert repair_er_diagram(code) == code
