import re

from flask import flash
from markupsafe import Markup
from wtforms.widgets import TextArea

from flask_detailview.exceptions import ConfigurationError
from flask_detailview.registry import InputWidgetRegistry
from flask_detailview.widgets import DetailView, detail_view

from .base import BaseDetailViewTestCase, Post


class DetailViewTestCase(BaseDetailViewTestCase):
    def setUp(self):
        super(DetailViewTestCase, self).setUp()
        self.post = Post(title="Hello", status="draft", tags=["a", "b"])

    def render(self, attributes=None, model=None, **options):
        return DetailView(model=model or self.post, attributes=attributes, **options)()

    def test_renders_markup_table(self):
        out = self.render(["title", "status"])
        self.assertIsInstance(out, Markup)
        self.assertIn('class="dv-detail-view table-responsive"', out)
        self.assertIn('class="table table-bordered table-striped detail-view"', out)
        self.assertIn(">Post Title</th>", out)
        self.assertIn('<div class="dv-attribute">Hello</div>', out)
        self.assertIn('style="width: 20%; text-align: right; vertical-align: middle;"', out)

    def test_view_mode_hides_edit_half(self):
        out = self.render(["title"])
        self.assertIn("dv-view-mode", out)
        self.assertIn('<div class="dv-form-attribute" style="display: none;">', out)
        self.assertIn('value="Hello"', out)
        self.assertTrue(out.startswith("<form "))

    def test_edit_mode_hides_view_half(self):
        out = self.render(["title"], mode="edit")
        self.assertIn("dv-edit-mode", out)
        self.assertIn('<div class="dv-attribute" style="display: none;">Hello</div>', out)
        self.assertIn('"mode": "edit"', out)

    def test_errors_force_edit_mode(self):
        post = Post(errors={"title": ["Title is required."]})
        out = self.render(["title"], model=post, mode="view")
        self.assertIn("dv-edit-mode", out)
        self.assertNotIn("dv-view-mode", out)
        self.assertIn("has-error", out)
        self.assertIn("Title is required.", out)

    def test_edit_model_errors_force_edit_mode(self):
        author = Post(title="Ann", errors={"title": ["Too short."]})
        out = self.render([{"name": "title", "edit_model": author}])
        self.assertIn("dv-edit-mode", out)
        self.assertIn('value="Ann"', out)

    def test_edit_mode_disabled(self):
        out = self.render(["title"], enable_edit_mode=False, panel={"heading": "Post"})
        self.assertNotIn("dv-form-attribute", out)
        self.assertNotIn("<form", out)
        self.assertNotIn("<button", out)
        self.assertNotIn("dv-btn-", out)
        self.assertNotIn("dv-view-mode", out)
        self.assertNotIn('"mode"', out)

    def test_group_row_spans_both_columns(self):
        out = self.render([{"group": True, "label": "Audit", "group_options": {"class": "info"}}, "title"])
        self.assertIn('<tr><th class="info" colspan="2">Audit</th></tr>', out)

    def test_columns_render_child_table(self):
        out = self.render([{"columns": ["title", "status"]}])
        self.assertIn('<tr class="dv-child-table-row">', out)
        self.assertIn('<td class="dv-child-table-cell" colspan="2">', out)
        self.assertIn('class="table table-bordered dv-child-table"', out)
        self.assertIn('<div class="dv-attribute">draft</div>', out)

    def test_hidden_markers(self):
        out = self.render(
            [{"name": "title", "value": ""}, {"name": "status", "input_kind": "hidden_input"}],
            hide_if_empty=True,
        )
        self.assertIn('<tr class="dv-view-hidden">', out)
        self.assertIn('<tr class="dv-edit-hidden">', out)

    def test_not_set_if_empty(self):
        out = self.render([{"name": "title", "value": ""}], not_set_if_empty=True)
        self.assertIn("(not set)", out)

    def test_arrays_are_stringified(self):
        out = self.render(["tags"])
        self.assertIn("[&#39;a&#39;, &#39;b&#39;]", out)

    def test_display_only(self):
        out = self.render([{"name": "status", "display_only": True}])
        self.assertNotIn('name="status"', out)
        self.assertEqual(out.count(">draft</div>"), 2)

    def test_update_markup(self):
        out = self.render(
            [{"name": "status", "update_markup": lambda form, widget: "<em>locked</em>"}]
        )
        self.assertIn("<em>locked</em>", out)

    def test_update_field_name(self):
        out = self.render([{"name": "title", "update_field_name": "post_title"}])
        self.assertIn('name="post_title"', out)

    def test_list_input_kind(self):
        out = self.render(
            [{"name": "status", "input_kind": "drop_down_list", "items": {"draft": "Draft", "live": "Live"}}]
        )
        self.assertIn('<option selected value="draft">Draft</option>', out)

    def test_html5_input_kind(self):
        out = self.render([{"name": "title", "input_kind": "input", "html_input_type": "color"}])
        self.assertIn('type="color"', out)

    def test_widget_input_kind(self):
        out = self.render(
            [{"name": "body", "input_kind": "widget", "widget_options": {"class": "wtforms.widgets.TextArea"}}]
        )
        self.assertIn("<textarea", out)

    def test_widget_input_kind_requires_class(self):
        with self.assertRaises(ConfigurationError) as cm:
            self.render([{"name": "body", "input_kind": "widget"}])
        self.assertEqual(cm.exception.attribute, "body")

    def test_registered_input_kind(self):
        registry = InputWidgetRegistry()
        registry.register("editor", TextArea)
        out = DetailView(
            model=self.post,
            attributes=[{"name": "body", "input_kind": "editor", "input_options": {"rows": 9}}],
            registry=registry,
        )()
        self.assertIn('rows="9"', out)

    def test_unknown_input_kind(self):
        with self.assertRaises(ConfigurationError) as cm:
            self.render([{"name": "title", "input_kind": "colorpicker"}])
        self.assertIn("colorpicker", str(cm.exception))
        self.assertEqual(cm.exception.attribute, "title")

    def test_derived_rows_skip_errors(self):
        out = self.render(enable_edit_mode=False)
        self.assertIn(">Post Title</th>", out)
        self.assertNotIn(">Errors</th>", out)

    def test_widget_instance_input_kind(self):
        with self.assertRaises(ConfigurationError) as cm:
            self.render([{"name": "body", "input_kind": TextArea()}])
        self.assertIn("Invalid input type", str(cm.exception))
        self.assertIn("'body'", str(cm.exception))
        self.assertEqual(cm.exception.attribute, "body")

    def test_widget_class_input_kind(self):
        out = self.render([{"name": "body", "input_kind": TextArea}])
        self.assertIn("<textarea", out)

    def test_input_container_grid(self):
        out = self.render([{"name": "title", "input_container": {"class": "col-sm-6"}, "input_width": "50%"}])
        self.assertIn('<div class="row"><div class="col-sm-6" style="width: 50%;">', out)

    def test_panel_bs3(self):
        out = self.render(["title"], panel={"heading": "Post #1", "type": "primary"})
        self.assertIn('class="panel panel-primary"', out)
        self.assertIn('<div class="panel-heading">', out)
        self.assertIn('<h3 class="panel-title">Post #1</h3>', out)
        self.assertIn("dv-flat-b", out)
        self.assertIn("dv-btn-update", out)
        self.assertIn("glyphicon glyphicon-pencil", out)
        self.assertIn('data-toggle="tooltip"', out)

    def test_token_like_record_data_is_kept(self):
        post = Post(title="{buttons}")
        out = self.render(["title"], model=post, panel={"heading": "P"})
        self.assertEqual(out.count("dv-btn-update"), 1)
        self.assertIn('<div class="dv-attribute">{buttons}</div>', out)
        self.assertIn('value="{buttons}"', out)

    def test_buttons_in_main_template(self):
        post = Post(title="{buttons}")
        out = self.render(["title"], model=post, main_template="{buttons}\n{detail}")
        self.assertEqual(out.count("dv-btn-update"), 1)
        self.assertIn('<div class="dv-attribute">{buttons}</div>', out)

    def test_panel_bs4(self):
        out = self.render(["title"], bs_version=4, panel={"heading": "Post", "type": "info", "footer": "Done"})
        self.assertIn("dv-container-bs4", out)
        self.assertIn('class="card border-info"', out)
        self.assertIn('<div class="card-header text-white bg-info">', out)
        self.assertIn('<h5 class="m-0">Post</h5>', out)
        self.assertIn('<div class="card-footer">Done</div>', out)
        self.assertIn("fas fa-pencil-alt", out)
        self.assertNotIn("dv-flat-b", out)

    def test_no_panel_without_options(self):
        out = self.render(["title"])
        self.assertNotIn("panel-heading", out)
        self.assertNotIn("dv-buttons-1", out)

    def test_buttons(self):
        view = DetailView(
            model=self.post,
            attributes=["title"],
            delete_options={"url": "/post/1/delete", "params": {"id": 1}},
            update_options={"label": "Edit"},
            tooltips=False,
        )
        view.render()
        buttons1 = view.render_buttons(1)
        self.assertIn('href="/post/1/delete"', buttons1)
        self.assertNotIn("params", buttons1)
        self.assertIn(">Edit</button>", buttons1)
        self.assertIn('title="Delete"', buttons1)
        self.assertNotIn("tooltip", buttons1)
        buttons2 = view.render_buttons(2)
        self.assertIn('type="reset"', buttons2)
        self.assertIn('type="submit"', buttons2)
        self.assertIn("dv-btn-view", buttons2)

    def test_custom_button_template(self):
        out = self.render(["title"], panel={"heading": "Post"}, buttons1="{update}")
        self.assertIn("dv-btn-update", out)
        self.assertNotIn("dv-btn-delete", out)

    def test_flash_messages_in_alert_block(self):
        out = self.render(
            ["title"],
            panel={"heading": "Post"},
            flash_messages=lambda: {"dv-detail-success": "Saved.", "other": "Ignored."},
        )
        self.assertIn('class="alert alert-success fade in"', out)
        self.assertIn("Saved.", out)
        self.assertNotIn("Ignored.", out)

    def test_flask_flash_is_read(self):
        flash("Record saved.", "dv-detail-info")
        out = self.render(["title"], panel={"heading": "Post"})
        self.assertIn("alert alert-info", out)
        self.assertIn("Record saved.", out)

    def test_empty_alert_block_is_hidden(self):
        out = self.render(["title"], panel={"heading": "Post"})
        self.assertIn('class="panel-body dv-alert-container" style="display: none;"', out)

    def test_hide_alerts(self):
        out = self.render(["title"], panel={"heading": "Post"}, hide_alerts=True)
        self.assertNotIn("dv-alert-container", out)

    def test_error_summary(self):
        post = Post(errors={"title": ["Title is required."]})
        out = self.render(["title"], model=post, panel={"heading": "Post"}, show_error_summary=True)
        self.assertIn("alert alert-danger", out)
        self.assertIn("<li>Title is required.</li>", out)

    def test_plugin_script(self):
        out = self.render(["title"], container={"id": "post-detail"}, fade_delay=300)
        self.assertIn('id="post-detail"', out)
        self.assertIn('$("#post-detail")', out)
        self.assertIn(".detailView(", out)
        self.assertIn('"fadeDelay": 300', out)
        self.assertIn("tooltip()", out)

    def test_render_script(self):
        view = DetailView(model=self.post, attributes=["title"], container={"id": "dv"}, tooltips=False)
        view.render()
        script = view.render_script()
        self.assertTrue(script.startswith("<script>"))
        self.assertIn('var $el = $("#dv");', script)
        self.assertIn("$el.detailView({", script)
        self.assertNotIn("tooltip()", script)

    def test_generated_container_id(self):
        out = self.render(["title"])
        self.assertRegex(str(out), r'id="detail-view-\d+"')

    def test_plugin_options(self):
        view = DetailView(model=self.post, attributes=["title"], delete_options={"confirm": "Sure?"})
        view.render()
        options = view.plugin_options()
        self.assertEqual(options["deleteConfirm"], "Sure?")
        self.assertEqual(options["alertMessageSettings"]["dv-detail-error"], "alert alert-danger")
        self.assertIn("{content}", options["alertTemplate"])
        self.assertEqual(options["mode"], "view")

    def test_attributes_from_model(self):
        out = self.render(model={"name": "Widget", "price": 10})
        self.assertEqual(len(re.findall(r"<tr>", str(out))), 2)
        self.assertIn(">Price</th>", out)

    def test_invalid_model(self):
        with self.assertRaises(ConfigurationError):
            DetailView(model="not a model")()

    def test_configuration_error_has_no_output(self):
        with self.assertRaises(ConfigurationError):
            detail_view(self.post, ["title", "author.name"])

    def test_detail_view_shortcut(self):
        out = detail_view(self.post, ["title:text:Heading"], enable_edit_mode=False)
        self.assertIn(">Heading</th>", out)
