"""
Local replica of the automation practice form.

The same form appears in the main document, in an iframe without an id,
in an iframe with id "iframeId", and as a shadow-DOM hosted sub-form
under the heading "Shadow DOM". Submitting any form renders a
"Submit Data" heading followed by the submitted fields as
pretty-printed JSON.
"""

import html
from pathlib import Path

PLACEHOLDER_OPTION = "-- Select Country --"

COUNTRIES = [
    "Afghanistan",
    "Argentina",
    "Australia",
    "Brazil",
    "Canada",
    "China",
    "France",
    "Germany",
    "India",
    "Japan",
    "Mexico",
    "United Kingdom",
    "United States",
]

ABOUT_MAX_LENGTH = 255

# Single quotes only, so the script source never looks like submitted JSON
SUBMIT_SCRIPT = """
document.querySelectorAll('form').forEach(function (form) {
  form.addEventListener('submit', function (event) {
    event.preventDefault();
    var data = {};
    Array.prototype.forEach.call(form.elements, function (el) {
      if (!el.name || el.type === 'submit' || el.type === 'reset') { return; }
      if ((el.type === 'checkbox' || el.type === 'radio') && !el.checked) { return; }
      data[el.name] = data[el.name] ? data[el.name] + ', ' + el.value : el.value;
    });
    var out = document.getElementById('response');
    out.innerHTML = '';
    var heading = document.createElement('h2');
    heading.textContent = 'Submit Data';
    var payload = document.createElement('pre');
    payload.textContent = JSON.stringify(data, null, 2);
    out.appendChild(heading);
    out.appendChild(payload);
  });
});
"""

SHADOW_SCRIPT = """
customElements.define('shadow-form', class extends HTMLElement {
  constructor() {
    super();
    var root = this.attachShadow({mode: 'open'});
    root.innerHTML =
      '<div><label>First Name</label><slot name=fname></slot></div>' +
      '<div><label>Last Name</label><slot name=lname></slot></div>' +
      '<div><label>State</label><select name=State>%s</select></div>' +
      '%s';
  }
});
"""

SHADOW_NEWSLETTER = "<div><label><input type=checkbox name=Newsletter> Send me news</label></div>"
SHADOW_TERMS = "<div><label><input type=checkbox name=ShadowAgreement> I agree</label></div>"


def _options() -> str:
    options = [f'<option value="">{PLACEHOLDER_OPTION}</option>']
    options.extend(f'<option value="{c}">{c}</option>' for c in COUNTRIES)
    return "\n".join(options)


def _radios(name: str, values: list[str]) -> str:
    return "\n".join(
        f'<input type="radio" id="{v.lower()}" name="{name}" value="{v}"><label for="{v.lower()}">{v}</label>'
        for v in values
    )


def _checkboxes(name: str, values: list[str]) -> str:
    return "\n".join(
        f'<input type="checkbox" id="{v.lower()}" name="{name}" value="{v}"><label for="{v.lower()}">{v}</label>'
        for v in values
    )


def build_form_markup() -> str:
    """The practice form itself, shared by every placement."""
    return f"""
<form id="automationtestform">
  <div><label for="fname">First Name</label>
    <input type="text" class="form-control" id="fname" name="First Name" placeholder="Name" required></div>
  <div><label for="lname">Last Name</label>
    <input type="text" class="form-control" id="lname" name="Last Name" placeholder="Surname"></div>
  <div><span>Gender</span>
    {_radios("Gender", ["Male", "Female", "Transgender"])}</div>
  <div><label for="dob">Date of Birth</label>
    <input type="date" class="form-control" id="dob" name="Date of Birth"></div>
  <div><label for="mobile">Mobile #</label>
    <input type="text" class="form-control" id="mobile" name="Mobile Number" placeholder="Mobile"></div>
  <div><label for="email">Email</label>
    <input type="email" class="form-control" id="email" name="Email" placeholder="Email"></div>
  <div><label for="countries">Country</label>
    <input type="text" class="form-control" id="countries" name="Country"></div>
  <div><label for="state">State</label>
    <select class="form-control" id="state" name="State">{_options()}</select></div>
  <div><span>Hobbies</span>
    {_checkboxes("Hobbies", ["Dance", "Reading", "Cricket"])}</div>
  <div><label for="about">About Yourself</label>
    <textarea class="form-control" id="about" name="About Yourself" maxlength="{ABOUT_MAX_LENGTH}"></textarea></div>
  <div><label for="username">Username</label>
    <input type="text" class="form-control" id="username" name="Username"></div>
  <div><label for="password">Password</label>
    <input type="password" class="form-control" id="password" name="Password"></div>
  <div><label for="confirmpassword">Confirm Password</label>
    <input type="password" class="form-control" id="confirmpassword" name="Confirm Password"></div>
  <div><label><input type="checkbox" id="Agreement" name="Agreement" required>
    I agree with the terms and conditions</label></div>
  <button type="submit" class="btn btn-primary">Submit</button>
  <button type="reset" class="btn btn-secondary">Reset</button>
</form>
"""


def build_iframe_document() -> str:
    return f"""<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>Embedded Form</title></head>
<body>
{build_form_markup()}
<div id="response"></div>
<script>{SUBMIT_SCRIPT}</script>
</body></html>"""


def build_practice_page(with_shadow_terms: bool = True, with_shadow_newsletter: bool = False) -> str:
    """
    Full page with the form in all four placements.

    The newsletter checkbox, when present, precedes the terms checkbox in
    the shadow root.
    """
    srcdoc = html.escape(build_iframe_document(), quote=True)
    shadow_options = "".join(
        f"<option>{option}</option>" for option in [PLACEHOLDER_OPTION] + COUNTRIES
    )
    checkboxes = ""
    if with_shadow_newsletter:
        checkboxes += SHADOW_NEWSLETTER
    if with_shadow_terms:
        checkboxes += SHADOW_TERMS
    shadow_script = SHADOW_SCRIPT % (shadow_options, checkboxes)
    return f"""<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>Automation Practice Form</title></head>
<body>
<h1>Automation Practice Form</h1>
{build_form_markup()}

<h2>IFrame without ID</h2>
<iframe srcdoc="{srcdoc}" width="900" height="700"></iframe>

<h2>IFrame with ID</h2>
<iframe id="iframeId" srcdoc="{srcdoc}" width="900" height="700"></iframe>

<h1>Shadow DOM</h1>
<form id="shadowdomautomationtestform">
  <shadow-form>
    <section slot="fname"><input type="text" name="fname" required></section>
    <section slot="lname"><input type="text" name="lname"></section>
  </shadow-form>
  <button type="submit">Submit</button>
</form>

<div id="response"></div>
<script>{shadow_script}</script>
<script>{SUBMIT_SCRIPT}</script>
</body></html>"""


def write_page(directory: Path, name: str, markup: str) -> str:
    path = directory / name
    path.write_text(markup, encoding="utf-8")
    return path.as_uri()
